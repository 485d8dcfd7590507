"""ValueService: coerce, compare and calculate over JSON literals.

Literals are JSON: ``12``, ``12.50``, ``"text"``, ``true``, ``null``,
``[1, 2]``, ``{"a": 1}``. Fractional numbers become exact Decimals.
"""

from __future__ import annotations

from typing import Any

from maytrix.services.base import BaseService
from maytrix.services.result import ServiceError, ServiceResult
from maytrix.value import (
    Operator,
    Value,
    arithmetic,
    coerce,
    compare,
    equals,
    parse_json,
    render,
)


def describe(value: Value) -> dict[str, Any]:
    """JSON-safe summary of a value for result payloads."""
    return {"kind": str(value.kind), "value": render(value)}


class ValueService(BaseService):
    """Exposes the value algebra to hosts that speak text."""

    def parse(self, literal: str) -> ServiceResult:
        parsed = parse_json(literal)
        if not parsed.ok:
            return self._fail("parse", parsed.error, literal=literal)  # type: ignore[arg-type]
        return ServiceResult(ok=True, op="parse", data=describe(parsed.value))  # type: ignore[arg-type]

    def coerce(self, literal: str, target: str) -> ServiceResult:
        op = "coerce"
        parsed = parse_json(literal)
        if not parsed.ok:
            return self._fail(op, parsed.error, literal=literal)  # type: ignore[arg-type]
        source: Value = parsed.value  # type: ignore[assignment]
        converted = coerce(source, target)
        if not converted.ok:
            return self._fail(op, converted.error)  # type: ignore[arg-type]
        return ServiceResult(
            ok=True,
            op=op,
            data={"input": describe(source), **describe(converted.value)},  # type: ignore[arg-type]
        )

    def compare(self, left: str, right: str) -> ServiceResult:
        op = "compare"
        operands: list[Value] = []
        for literal in (left, right):
            parsed = parse_json(literal)
            if not parsed.ok:
                return self._fail(op, parsed.error, literal=literal)  # type: ignore[arg-type]
            operands.append(parsed.value)  # type: ignore[arg-type]
        a, b = operands
        ordered = compare(a, b)
        if not ordered.ok:
            return self._fail(op, ordered.error)  # type: ignore[arg-type]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "left": render(a),
                "right": render(b),
                "ordering": ordered.value.name.lower(),  # type: ignore[union-attr]
                "equal": equals(a, b),
            },
        )

    def calculate(self, left: str, operator: str, right: str) -> ServiceResult:
        op = "calculate"
        if operator not in set(Operator):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="INVALID_OPERATOR",
                    message=f"unknown operator {operator!r}; use one of + - * /",
                ),
            )
        symbol = Operator(operator)
        operands: list[Value] = []
        for literal in (left, right):
            parsed = parse_json(literal)
            if not parsed.ok:
                return self._fail(op, parsed.error, literal=literal)  # type: ignore[arg-type]
            operands.append(parsed.value)  # type: ignore[arg-type]
        outcome = arithmetic(
            symbol,
            operands[0],
            operands[1],
            division_scale=self._settings.arithmetic.division_scale,
        )
        if not outcome.ok:
            return self._fail(op, outcome.error)  # type: ignore[arg-type]
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "expression": f"{render(operands[0])} {symbol} {render(operands[1])}",
                **describe(outcome.value),  # type: ignore[arg-type]
            },
        )
