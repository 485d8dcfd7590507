"""Declarative rule catalog.

Turns plain data (as read from a TOML rules file) into rules and rule
sets. Each entry names one field and one built-in check:

- ``required``: the field is not null
- ``non_empty``: not null and not empty text/list/map
- ``min`` / ``max``: ordered against ``bound`` (numeric or text)
- ``one_of``: equal to one of ``values``
- ``kind``: has exactly the variant ``expect``
- ``matches``: text fully matching the regex ``pattern``

A missing field makes any catalog rule inapplicable, like every rule.
When an ordering check cannot compare the field with its bound, the
rule fails with the algebra's message.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from maytrix.domain.errors import RuleErrorCode
from maytrix.domain.rules import Rule, RuleOutcome, define_rule
from maytrix.domain.ruleset import RuleSet, RuleSetBuilder
from maytrix.domain.schema import EntitySchema
from maytrix.value import (
    ListValue,
    MapValue,
    NullValue,
    Ordering,
    Result,
    TextValue,
    Value,
    ValueKind,
    compare,
    from_python,
    render,
)


class CatalogKind(StrEnum):
    REQUIRED = "required"
    NON_EMPTY = "non_empty"
    MIN = "min"
    MAX = "max"
    ONE_OF = "one_of"
    KIND = "kind"
    MATCHES = "matches"


class RuleSpec(BaseModel):
    """One ``[[rules]]`` entry."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str
    kind: CatalogKind
    field: str
    reason: str | None = None
    description: str | None = None
    bound: Any = None
    values: list[Any] = Field(default_factory=list)
    expect: ValueKind | None = None
    pattern: str | None = None


def _is_empty(value: Value) -> bool:
    match value:
        case NullValue():
            return True
        case TextValue():
            return value.value == ""
        case ListValue() | MapValue():
            return len(value) == 0
    return False


def _convert(raw: Any, spec: RuleSpec, what: str) -> Result[Value]:
    converted = from_python(raw)
    if not converted.ok:
        return Result.failure(
            RuleErrorCode.INVALID_RULE,
            f"rule {spec.name}: invalid {what}: {converted.error.message}",  # type: ignore[union-attr]
            rule=spec.name,
        )
    return converted


def _ordering_check(spec: RuleSpec, bound: Value, rejected: Ordering) -> Any:
    word = "below" if rejected is Ordering.LESS else "above"
    reason = spec.reason or f"{spec.field} {word} {render(bound)}"

    def check(value: Value) -> RuleOutcome:
        ordered = compare(value, bound)
        if not ordered.ok:
            return RuleOutcome.failed(f"{spec.field}: {ordered.error.message}")  # type: ignore[union-attr]
        if ordered.value is rejected:
            return RuleOutcome.failed(reason)
        return RuleOutcome.passed()

    return check


def build_rule(spec: RuleSpec) -> Result[Rule]:
    """Build one rule from its spec, or fail with INVALID_RULE."""
    match spec.kind:
        case CatalogKind.REQUIRED:
            reason = spec.reason or f"{spec.field} is required"

            def check(value: Value) -> RuleOutcome:
                if isinstance(value, NullValue):
                    return RuleOutcome.failed(reason)
                return RuleOutcome.passed()

        case CatalogKind.NON_EMPTY:
            reason = spec.reason or f"{spec.field} is empty"

            def check(value: Value) -> RuleOutcome:
                return RuleOutcome.failed(reason) if _is_empty(value) else RuleOutcome.passed()

        case CatalogKind.MIN | CatalogKind.MAX:
            if spec.bound is None:
                return Result.failure(
                    RuleErrorCode.INVALID_RULE,
                    f"rule {spec.name}: {spec.kind} needs a bound",
                    rule=spec.name,
                )
            bound = _convert(spec.bound, spec, "bound")
            if not bound.ok:
                return Result.from_failure(bound.error)  # type: ignore[arg-type]
            rejected = Ordering.LESS if spec.kind is CatalogKind.MIN else Ordering.GREATER
            check = _ordering_check(spec, bound.value, rejected)  # type: ignore[arg-type]

        case CatalogKind.ONE_OF:
            allowed: list[Value] = []
            for raw in spec.values:
                converted = _convert(raw, spec, "value")
                if not converted.ok:
                    return Result.from_failure(converted.error)  # type: ignore[arg-type]
                allowed.append(converted.value)  # type: ignore[arg-type]
            if not allowed:
                return Result.failure(
                    RuleErrorCode.INVALID_RULE,
                    f"rule {spec.name}: one_of needs at least one value",
                    rule=spec.name,
                )
            listing = ", ".join(render(v) for v in allowed)
            reason = spec.reason or f"{spec.field} must be one of {listing}"

            def check(value: Value) -> RuleOutcome:
                return RuleOutcome.passed() if value in allowed else RuleOutcome.failed(reason)

        case CatalogKind.KIND:
            if spec.expect is None:
                return Result.failure(
                    RuleErrorCode.INVALID_RULE,
                    f"rule {spec.name}: kind needs 'expect'",
                    rule=spec.name,
                )
            expected = spec.expect
            reason = spec.reason or f"{spec.field} must be {expected}"

            def check(value: Value) -> RuleOutcome:
                return RuleOutcome.passed() if value.kind is expected else RuleOutcome.failed(reason)

        case CatalogKind.MATCHES:
            if spec.pattern is None:
                return Result.failure(
                    RuleErrorCode.INVALID_RULE,
                    f"rule {spec.name}: matches needs a pattern",
                    rule=spec.name,
                )
            try:
                compiled = re.compile(spec.pattern)
            except re.error as exc:
                return Result.failure(
                    RuleErrorCode.INVALID_RULE,
                    f"rule {spec.name}: bad pattern: {exc}",
                    rule=spec.name,
                )
            reason = spec.reason or f"{spec.field} does not match {spec.pattern}"

            def check(value: Value) -> RuleOutcome:
                if isinstance(value, TextValue) and compiled.fullmatch(value.value):
                    return RuleOutcome.passed()
                return RuleOutcome.failed(reason)

    return define_rule(spec.name, [spec.field], check, description=spec.description)


def parse_rule_spec(data: Mapping[str, Any]) -> Result[RuleSpec]:
    try:
        return Result.success(RuleSpec.model_validate(dict(data)))
    except ValidationError as exc:
        name = data.get("name", "?") if isinstance(data, Mapping) else "?"
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<entry>'}: {err['msg']}" for err in exc.errors()
        )
        return Result.failure(
            RuleErrorCode.INVALID_RULE,
            f"rule {name}: {problems}",
            rule=str(name),
        )


def build_schema(data: Any, *, strict: bool = False) -> Result[EntitySchema]:
    """Build an EntitySchema from a ``[schema]`` table."""
    if not isinstance(data, Mapping):
        return Result.failure(RuleErrorCode.INVALID_RULE, "'schema' must be a table")
    return EntitySchema.from_mapping(data, strict=strict)


def build_rule_set(data: Mapping[str, Any]) -> Result[RuleSet]:
    """Build a frozen RuleSet from ``{"schema": {...}, "rules": [...]}``.

    ``schema`` is optional; when present, dependencies are checked against
    it at registration. ``strict_schema`` makes undeclared entity fields
    schema violations.
    """
    schema: EntitySchema | None = None
    raw_schema = data.get("schema")
    if raw_schema is not None:
        built = build_schema(raw_schema, strict=bool(data.get("strict_schema", False)))
        if not built.ok:
            return Result.from_failure(built.error)  # type: ignore[arg-type]
        schema = built.value

    raw_rules = data.get("rules", [])
    if not isinstance(raw_rules, list):
        return Result.failure(RuleErrorCode.INVALID_RULE, "'rules' must be an array of tables")

    builder = RuleSetBuilder(schema=schema)
    for entry in raw_rules:
        if not isinstance(entry, Mapping):
            return Result.failure(RuleErrorCode.INVALID_RULE, "each rule must be a table")
        spec = parse_rule_spec(entry)
        if not spec.ok:
            return Result.from_failure(spec.error)  # type: ignore[arg-type]
        rule = build_rule(spec.value)  # type: ignore[arg-type]
        if not rule.ok:
            return Result.from_failure(rule.error)  # type: ignore[arg-type]
        registered = builder.register(rule.value)  # type: ignore[arg-type]
        if not registered.ok:
            return Result.from_failure(registered.error)  # type: ignore[arg-type]
    return Result.success(builder.freeze())
