"""Bridge between native Python objects / JSON text and Values.

The host owns parsing of external formats; these helpers cover the
common case of JSON-shaped data. Floats are rejected so that no binary
floating-point value ever enters the algebra; JSON numbers with a
fraction are parsed straight into :class:`decimal.Decimal`.
"""

from __future__ import annotations

import decimal as _decimal
import json
from typing import Any

from maytrix.value.errors import Result, ValueErrorCode
from maytrix.value.kinds import in_int64_range
from maytrix.value.model import (
    NULL,
    BooleanValue,
    DecimalValue,
    IntegerValue,
    ListValue,
    MapValue,
    NullValue,
    TextValue,
    Value,
    _BaseValue,
)


def _from_decimal(number: _decimal.Decimal) -> Result[Value]:
    if not number.is_finite():
        return Result.failure(
            ValueErrorCode.INVALID_PAYLOAD,
            f"non-finite decimal: {number}",
            value=str(number),
        )
    sign, digits, exponent = number.as_tuple()
    unscaled = int("".join(str(d) for d in digits) or "0")
    if sign:
        unscaled = -unscaled
    exponent = int(exponent)
    if exponent > 0:
        return Result.success(DecimalValue(unscaled * 10**exponent, 0))
    return Result.success(DecimalValue(unscaled, -exponent))


def from_python(obj: Any, *, _path: str = "$") -> Result[Value]:
    """Convert JSON-shaped Python data into a Value.

    Accepts None, bool, int, :class:`decimal.Decimal`, str, list/tuple and
    dict with str keys. Existing Values pass through unchanged.
    """
    if isinstance(obj, _BaseValue):
        return Result.success(obj)  # type: ignore[arg-type]
    if obj is None:
        return Result.success(NULL)
    if isinstance(obj, bool):
        return Result.success(BooleanValue(obj))
    if isinstance(obj, int):
        if not in_int64_range(obj):
            return Result.failure(
                ValueErrorCode.INVALID_PAYLOAD,
                f"integer at {_path} outside 64-bit range",
                path=_path,
            )
        return Result.success(IntegerValue(obj))
    if isinstance(obj, _decimal.Decimal):
        return _from_decimal(obj)
    if isinstance(obj, str):
        return Result.success(TextValue(obj))
    if isinstance(obj, (list, tuple)):
        items: list[Value] = []
        for i, element in enumerate(obj):
            converted = from_python(element, _path=f"{_path}[{i}]")
            if not converted.ok:
                return converted
            items.append(converted.value)  # type: ignore[arg-type]
        return Result.success(ListValue(tuple(items)))
    if isinstance(obj, dict):
        entries: list[tuple[str, Value]] = []
        for key, element in obj.items():
            if not isinstance(key, str):
                return Result.failure(
                    ValueErrorCode.INVALID_PAYLOAD,
                    f"map key at {_path} must be text, got {type(key).__name__}",
                    path=_path,
                )
            converted = from_python(element, _path=f"{_path}.{key}")
            if not converted.ok:
                return converted
            entries.append((key, converted.value))  # type: ignore[arg-type]
        return Result.success(MapValue(tuple(entries)))
    return Result.failure(
        ValueErrorCode.INVALID_PAYLOAD,
        f"unsupported type at {_path}: {type(obj).__name__}",
        path=_path,
    )


def to_python(value: Value) -> Any:
    """Convert a Value into plain Python data (decimals as Decimal)."""
    match value:
        case NullValue():
            return None
        case BooleanValue() | IntegerValue() | TextValue():
            return value.value
        case DecimalValue():
            return _decimal.Decimal(value.unscaled).scaleb(-value.scale)
        case ListValue():
            return [to_python(item) for item in value.items]
        case MapValue():
            return {key: to_python(item) for key, item in value.entries}
    raise TypeError(f"not a Value: {value!r}")


def parse_json(raw: str) -> Result[Value]:
    """Parse JSON text into a Value, keeping fractional numbers exact."""
    try:
        data = json.loads(raw, parse_float=_decimal.Decimal)
    except json.JSONDecodeError as exc:
        return Result.failure(
            ValueErrorCode.INVALID_PAYLOAD,
            f"invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})",
            line=exc.lineno,
            column=exc.colno,
        )
    return from_python(data)
