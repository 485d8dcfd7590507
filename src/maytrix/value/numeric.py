"""Exact fixed-point arithmetic over Integer and Decimal values.

All arithmetic is done on Python ints (unscaled value + scale); no float
ever appears. Only division rounds, once, half-to-even, at the result
scale.
"""

from __future__ import annotations

import re

from maytrix.value.errors import Result, ValueErrorCode
from maytrix.value.kinds import Operator, in_int64_range
from maytrix.value.model import DecimalValue, IntegerValue, Value, numeric_parts

DEFAULT_DIVISION_SCALE = 0

_NUMERAL = re.compile(r"([+-]?)([0-9]+)(?:\.([0-9]+))?")


def parse_numeral(literal: str) -> tuple[int, int] | None:
    """Parse ``[+-]?digits(.digits)?`` into ``(unscaled, scale)``.

    Returns None for anything else (exponents, whitespace, ``"1."``,
    non-ASCII digits).
    """
    match = _NUMERAL.fullmatch(literal)
    if match is None:
        return None
    sign, whole, fraction = match.groups()
    fraction = fraction or ""
    unscaled = int(whole + fraction)
    if sign == "-":
        unscaled = -unscaled
    return unscaled, len(fraction)


def rescale(unscaled: int, scale: int, target: int) -> int:
    """Raise *unscaled* from *scale* to a larger *target* scale exactly."""
    return unscaled * 10 ** (target - scale)


def divide_half_even(numerator: int, denominator: int) -> int:
    """Integer quotient rounded half-to-even. *denominator* must be non-zero."""
    negative = (numerator < 0) != (denominator < 0)
    n, d = abs(numerator), abs(denominator)
    quotient, remainder = divmod(n, d)
    twice = remainder * 2
    if twice > d or (twice == d and quotient % 2 == 1):
        quotient += 1
    return -quotient if negative else quotient


def compare_numeric(a: IntegerValue | DecimalValue, b: IntegerValue | DecimalValue) -> int:
    """Return -1, 0 or 1 comparing two numeric values exactly."""
    ua, sa = numeric_parts(a)
    ub, sb = numeric_parts(b)
    scale = max(sa, sb)
    left, right = rescale(ua, sa, scale), rescale(ub, sb, scale)
    return (left > right) - (left < right)


def arithmetic(
    op: Operator | str,
    a: Value,
    b: Value,
    *,
    division_scale: int = DEFAULT_DIVISION_SCALE,
) -> Result[Value]:
    """Apply ``+ - * /`` to two numeric values.

    Integer pairs stay Integer for ``+ - *`` and fail with OVERFLOW outside
    64 bits. Mixed pairs promote the Integer to Decimal scale 0. Division
    always yields a Decimal at ``max(scale_a, scale_b, division_scale)``.
    """
    try:
        operator = Operator(op)
    except ValueError:
        return Result.failure(ValueErrorCode.INVALID_PAYLOAD, f"unknown operator: {op!r}", op=str(op))

    if not (a.is_numeric and b.is_numeric):
        return Result.failure(
            ValueErrorCode.INVALID_PAYLOAD,
            f"arithmetic needs numeric operands, got {a.kind} {operator} {b.kind}",
            op=str(operator),
            left=str(a.kind),
            right=str(b.kind),
        )
    if division_scale < 0:
        return Result.failure(
            ValueErrorCode.INVALID_PAYLOAD,
            f"division scale must be non-negative, got {division_scale}",
            division_scale=division_scale,
        )

    ua, sa = numeric_parts(a)  # type: ignore[arg-type]
    ub, sb = numeric_parts(b)  # type: ignore[arg-type]

    if operator is Operator.DIVIDE:
        if ub == 0:
            return Result.failure(
                ValueErrorCode.DIVISION_BY_ZERO,
                "division by zero",
                left=_describe(a),
            )
        scale = max(sa, sb, division_scale)
        # a / b = (ua / 10**sa) / (ub / 10**sb); scaled by 10**scale
        numerator = ua * 10 ** (sb + scale)
        denominator = ub * 10**sa
        return Result.success(DecimalValue(divide_half_even(numerator, denominator), scale))

    both_integer = isinstance(a, IntegerValue) and isinstance(b, IntegerValue)

    if operator is Operator.MULTIPLY:
        unscaled, scale = ua * ub, sa + sb
    else:
        scale = max(sa, sb)
        left, right = rescale(ua, sa, scale), rescale(ub, sb, scale)
        unscaled = left + right if operator is Operator.ADD else left - right

    if both_integer:
        if not in_int64_range(unscaled):
            return Result.failure(
                ValueErrorCode.OVERFLOW,
                f"integer overflow: {ua} {operator} {ub}",
                op=str(operator),
                left=ua,
                right=ub,
            )
        return Result.success(IntegerValue(unscaled))
    return Result.success(DecimalValue(unscaled, scale))


def _describe(value: Value) -> str:
    from maytrix.value.ops import render

    return render(value)
