"""Equality, ordering, coercion, rendering and traversal.

Every function here is pure: the same inputs give the same output or the
same failure. Map iteration order is insertion order.
"""

from __future__ import annotations

import json
from collections.abc import Sequence

from maytrix.value.errors import Result, ValueErrorCode
from maytrix.value.kinds import Ordering, ValueKind, in_int64_range
from maytrix.value.model import (
    BooleanValue,
    DecimalValue,
    IntegerValue,
    ListValue,
    MapValue,
    NullValue,
    TextValue,
    Value,
    values_equal,
)
from maytrix.value.numeric import compare_numeric, parse_numeral

# ---------------------------------------------------------------------------
# Equality and ordering
# ---------------------------------------------------------------------------


def equals(a: Value, b: Value) -> bool:
    """Algebra equality (numeric across Integer/Decimal, exact otherwise)."""
    return values_equal(a, b)


def compare(a: Value, b: Value) -> Result[Ordering]:
    """Order two values.

    Numeric pairs compare by exact value, Text pairs by code point.
    Everything else fails with INCOMPARABLE.
    """
    if a.is_numeric and b.is_numeric:
        return Result.success(Ordering(compare_numeric(a, b)))  # type: ignore[arg-type]
    if isinstance(a, TextValue) and isinstance(b, TextValue):
        return Result.success(Ordering((a.value > b.value) - (a.value < b.value)))
    return Result.failure(
        ValueErrorCode.INCOMPARABLE,
        f"cannot order {a.kind} against {b.kind}",
        left=str(a.kind),
        right=str(b.kind),
    )


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_decimal(value: DecimalValue) -> str:
    digits = str(abs(value.unscaled))
    if value.scale:
        digits = digits.rjust(value.scale + 1, "0")
        digits = f"{digits[: -value.scale]}.{digits[-value.scale :]}"
    return f"-{digits}" if value.unscaled < 0 else digits


def _render_nested(value: Value) -> str:
    if isinstance(value, TextValue):
        return json.dumps(value.value, ensure_ascii=False)
    return render(value)


def render(value: Value) -> str:
    """Canonical text rendering. Always succeeds.

    Top-level Text renders as-is; Text nested in a List or Map is
    JSON-quoted so the structure stays unambiguous.
    """
    match value:
        case NullValue():
            return "null"
        case BooleanValue():
            return "true" if value.value else "false"
        case IntegerValue():
            return str(value.value)
        case DecimalValue():
            return _render_decimal(value)
        case TextValue():
            return value.value
        case ListValue():
            return "[" + ", ".join(_render_nested(item) for item in value.items) + "]"
        case MapValue():
            body = ", ".join(
                f"{json.dumps(key, ensure_ascii=False)}: {_render_nested(item)}"
                for key, item in value.entries
            )
            return "{" + body + "}"
    raise TypeError(f"not a Value: {value!r}")


# ---------------------------------------------------------------------------
# Coercion
# ---------------------------------------------------------------------------


def _coercion_failure(value: Value, target: ValueKind, reason: str) -> Result[Value]:
    return Result.failure(
        ValueErrorCode.COERCION_ERROR,
        f"cannot coerce {value.kind} {render(value)!r} to {target}: {reason}",
        source=str(value.kind),
        target=str(target),
        value=render(value),
    )


def _integer_from_parts(value: Value, unscaled: int, scale: int) -> Result[Value]:
    divisor = 10**scale
    if unscaled % divisor != 0:
        return _coercion_failure(value, ValueKind.INTEGER, "fractional part is not zero")
    whole = unscaled // divisor
    if not in_int64_range(whole):
        return _coercion_failure(value, ValueKind.INTEGER, "outside 64-bit range")
    return Result.success(IntegerValue(whole))


def coerce(value: Value, target: ValueKind | str) -> Result[Value]:
    """Convert *value* to the *target* variant, or fail with COERCION_ERROR.

    Allowed: identity, Integer<->Decimal (exact only), Boolean<->Integer
    (0/1 only), Text->Integer/Decimal (numerals only), anything->Text.
    """
    try:
        kind = ValueKind(target)
    except ValueError:
        return Result.failure(
            ValueErrorCode.COERCION_ERROR,
            f"unknown target kind: {target!r}",
            target=str(target),
        )

    if value.kind is kind:
        return Result.success(value)
    if kind is ValueKind.TEXT:
        return Result.success(TextValue(render(value)))

    match value, kind:
        case IntegerValue(), ValueKind.DECIMAL:
            return Result.success(DecimalValue(value.value, 0))
        case DecimalValue(), ValueKind.INTEGER:
            return _integer_from_parts(value, value.unscaled, value.scale)
        case BooleanValue(), ValueKind.INTEGER:
            return Result.success(IntegerValue(1 if value.value else 0))
        case IntegerValue(), ValueKind.BOOLEAN:
            if value.value in (0, 1):
                return Result.success(BooleanValue(value.value == 1))
            return _coercion_failure(value, kind, "only 0 and 1 map to boolean")
        case TextValue(), ValueKind.INTEGER | ValueKind.DECIMAL:
            parsed = parse_numeral(value.value)
            if parsed is None:
                return _coercion_failure(value, kind, "not a numeral")
            if kind is ValueKind.DECIMAL:
                return Result.success(DecimalValue(*parsed))
            return _integer_from_parts(value, *parsed)

    return _coercion_failure(value, kind, "no coercion defined")


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def path_get(map_value: Value, path: Sequence[str]) -> Result[Value]:
    """Follow *path* through nested Maps. Never descends into Lists."""
    current: Value = map_value
    walked: list[str] = []
    for segment in path:
        if not isinstance(current, MapValue):
            return Result.failure(
                ValueErrorCode.PATH_NOT_FOUND,
                f"{'.'.join(walked) or '<root>'} is {current.kind}, not map",
                path=list(path),
                segment=segment,
            )
        item = current.get(segment)
        if item is None:
            return Result.failure(
                ValueErrorCode.PATH_NOT_FOUND,
                f"no field {'.'.join([*walked, segment])!r}",
                path=list(path),
                segment=segment,
            )
        walked.append(segment)
        current = item
    if not walked and not isinstance(current, MapValue):
        return Result.failure(
            ValueErrorCode.PATH_NOT_FOUND,
            f"path root is {current.kind}, not map",
            path=[],
        )
    return Result.success(current)


def index_get(list_value: Value, index: int) -> Result[Value]:
    """Zero-based element access on a List."""
    if not isinstance(list_value, ListValue):
        return Result.failure(
            ValueErrorCode.PATH_NOT_FOUND,
            f"cannot index into {list_value.kind}",
            index=index,
        )
    if isinstance(index, bool) or not 0 <= index < len(list_value.items):
        return Result.failure(
            ValueErrorCode.PATH_NOT_FOUND,
            f"index {index} out of range for list of length {len(list_value.items)}",
            index=index,
            length=len(list_value.items),
        )
    return Result.success(list_value.items[index])
