"""Value variants: the closed, immutable tagged union.

Seven frozen dataclasses make up :data:`Value`. Payload validation lives
in one place (the ``_*_problem`` checkers) and is shared by two entry
points:

- :func:`construct` returns a :class:`Result` and never raises.
- Direct instantiation (``IntegerValue(3)``) raises :class:`UnwrapError`
  on an invalid payload, so a Value object in hand is always well-formed.

Equality and hashing follow the algebra: Integer and Decimal compare by
exact numeric value across variants, every other cross-variant pair is
unequal.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, ClassVar

from maytrix.value.errors import Failure, Result, UnwrapError, ValueErrorCode
from maytrix.value.kinds import INT64_MAX, INT64_MIN, ValueKind, in_int64_range

# ---------------------------------------------------------------------------
# Payload checkers (return a message when the payload is invalid)
# ---------------------------------------------------------------------------


def _boolean_problem(payload: Any) -> str | None:
    if not isinstance(payload, bool):
        return f"boolean payload must be bool, got {type(payload).__name__}"
    return None


def _integer_problem(payload: Any) -> str | None:
    if isinstance(payload, bool) or not isinstance(payload, int):
        return f"integer payload must be int, got {type(payload).__name__}"
    if not in_int64_range(payload):
        return f"integer {payload} outside 64-bit range [{INT64_MIN}, {INT64_MAX}]"
    return None


def _decimal_problem(unscaled: Any, scale: Any) -> str | None:
    if isinstance(unscaled, bool) or not isinstance(unscaled, int):
        return f"decimal unscaled value must be int, got {type(unscaled).__name__}"
    if isinstance(scale, bool) or not isinstance(scale, int):
        return f"decimal scale must be int, got {type(scale).__name__}"
    if scale < 0:
        return f"decimal scale must be non-negative, got {scale}"
    return None


def _text_problem(payload: Any) -> str | None:
    if not isinstance(payload, str):
        return f"text payload must be str, got {type(payload).__name__}"
    return None


def _list_problem(items: Sequence[Any]) -> str | None:
    for i, item in enumerate(items):
        if not isinstance(item, _BaseValue):
            return f"list element {i} is not a Value ({type(item).__name__})"
    return None


def _map_problem(entries: Sequence[Any]) -> str | None:
    seen: set[str] = set()
    for entry in entries:
        if not isinstance(entry, tuple) or len(entry) != 2:
            return f"map entry must be a (key, value) pair, got {entry!r}"
        key, item = entry
        if not isinstance(key, str):
            return f"map key must be text, got {type(key).__name__}"
        if key in seen:
            return f"duplicate map key: {key!r}"
        if not isinstance(item, _BaseValue):
            return f"map value for {key!r} is not a Value ({type(item).__name__})"
        seen.add(key)
    return None


def _normalize_entries(payload: Any) -> tuple[Any, ...] | None:
    """Turn a Mapping or pair sequence into a tuple of pairs (None if neither)."""
    if isinstance(payload, Mapping):
        return tuple(payload.items())
    if isinstance(payload, (list, tuple)):
        return tuple(tuple(e) if isinstance(e, list) else e for e in payload)
    return None


def _reject(kind: ValueKind, message: str) -> UnwrapError:
    return UnwrapError(
        Failure(
            code=ValueErrorCode.INVALID_PAYLOAD,
            message=message,
            detail={"kind": str(kind)},
        )
    )


# ---------------------------------------------------------------------------
# Variants
# ---------------------------------------------------------------------------


class _BaseValue:
    """Shared equality/hash behaviour for all variants."""

    kind: ClassVar[ValueKind]

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _BaseValue):
            return NotImplemented
        return values_equal(self, other)  # type: ignore[arg-type]

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return value_hash(self)  # type: ignore[arg-type]

    @property
    def is_numeric(self) -> bool:
        return self.kind in (ValueKind.INTEGER, ValueKind.DECIMAL)


@dataclass(frozen=True, eq=False)
class NullValue(_BaseValue):
    kind: ClassVar[ValueKind] = ValueKind.NULL

    def __repr__(self) -> str:
        return "Null"


@dataclass(frozen=True, eq=False)
class BooleanValue(_BaseValue):
    kind: ClassVar[ValueKind] = ValueKind.BOOLEAN

    value: bool

    def __post_init__(self) -> None:
        problem = _boolean_problem(self.value)
        if problem:
            raise _reject(self.kind, problem)


@dataclass(frozen=True, eq=False)
class IntegerValue(_BaseValue):
    """Signed 64-bit integer."""

    kind: ClassVar[ValueKind] = ValueKind.INTEGER

    value: int

    def __post_init__(self) -> None:
        problem = _integer_problem(self.value)
        if problem:
            raise _reject(self.kind, problem)


@dataclass(frozen=True, eq=False)
class DecimalValue(_BaseValue):
    """Fixed-point decimal: ``unscaled * 10 ** -scale``.

    The sign lives in *unscaled*; *scale* is the count of fractional
    digits and is preserved (``1.50`` keeps scale 2) even though it does
    not affect equality.
    """

    kind: ClassVar[ValueKind] = ValueKind.DECIMAL

    unscaled: int
    scale: int = 0

    def __post_init__(self) -> None:
        problem = _decimal_problem(self.unscaled, self.scale)
        if problem:
            raise _reject(self.kind, problem)

    @property
    def sign(self) -> int:
        if self.unscaled > 0:
            return 1
        if self.unscaled < 0:
            return -1
        return 0

    @property
    def has_fraction(self) -> bool:
        """True if the fractional part is non-zero."""
        return self.unscaled % (10**self.scale) != 0


@dataclass(frozen=True, eq=False)
class TextValue(_BaseValue):
    kind: ClassVar[ValueKind] = ValueKind.TEXT

    value: str

    def __post_init__(self) -> None:
        problem = _text_problem(self.value)
        if problem:
            raise _reject(self.kind, problem)


@dataclass(frozen=True, eq=False)
class ListValue(_BaseValue):
    """Ordered sequence of values."""

    kind: ClassVar[ValueKind] = ValueKind.LIST

    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))
        problem = _list_problem(self.items)
        if problem:
            raise _reject(self.kind, problem)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)


@dataclass(frozen=True, eq=False)
class MapValue(_BaseValue):
    """Text-keyed mapping; keys unique, insertion order preserved."""

    kind: ClassVar[ValueKind] = ValueKind.MAP

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        entries = _normalize_entries(self.entries)
        if entries is None:
            raise _reject(self.kind, "map payload must be a mapping or a sequence of pairs")
        problem = _map_problem(entries)
        if problem:
            raise _reject(self.kind, problem)
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_index", dict(entries))

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index

    def get(self, key: str) -> Value | None:
        return self._index.get(key)

    def keys(self) -> tuple[str, ...]:
        return tuple(k for k, _ in self.entries)

    def items(self) -> tuple[tuple[str, Value], ...]:
        return self.entries

    def with_entry(self, key: str, item: Value) -> MapValue:
        """Return a new map with *key* set (replaced in place or appended)."""
        if key in self._index:
            return MapValue(tuple((k, item if k == key else v) for k, v in self.entries))
        return MapValue((*self.entries, (key, item)))


Value = NullValue | BooleanValue | IntegerValue | DecimalValue | TextValue | ListValue | MapValue

NULL = NullValue()


# ---------------------------------------------------------------------------
# Equality and hashing
# ---------------------------------------------------------------------------


def numeric_parts(value: IntegerValue | DecimalValue) -> tuple[int, int]:
    """Return ``(unscaled, scale)``; an Integer is a Decimal of scale 0."""
    if isinstance(value, IntegerValue):
        return value.value, 0
    return value.unscaled, value.scale


def _canonical_numeric(value: IntegerValue | DecimalValue) -> tuple[int, int]:
    """Strip trailing fractional zeros so equal numbers share one form."""
    unscaled, scale = numeric_parts(value)
    while scale > 0 and unscaled % 10 == 0:
        unscaled //= 10
        scale -= 1
    return unscaled, scale


def values_equal(a: Value, b: Value) -> bool:
    if a.is_numeric and b.is_numeric:
        return _canonical_numeric(a) == _canonical_numeric(b)  # type: ignore[arg-type]
    if a.kind is not b.kind:
        return False
    match a:
        case NullValue():
            return True
        case BooleanValue() | IntegerValue() | TextValue():
            return a.value == b.value  # type: ignore[union-attr]
        case ListValue():
            return len(a.items) == len(b.items) and all(  # type: ignore[union-attr]
                values_equal(x, y)
                for x, y in zip(a.items, b.items, strict=True)  # type: ignore[union-attr]
            )
        case MapValue():
            other: MapValue = b  # type: ignore[assignment]
            if len(a) != len(other):
                return False
            for key, item in a.entries:
                counterpart = other.get(key)
                if counterpart is None or not values_equal(item, counterpart):
                    return False
            return True
    return False


def value_hash(value: Value) -> int:
    match value:
        case NullValue():
            return hash(ValueKind.NULL)
        case IntegerValue() | DecimalValue():
            return hash(("numeric", *_canonical_numeric(value)))
        case BooleanValue() | TextValue():
            return hash((value.kind, value.value))
        case ListValue():
            return hash((ValueKind.LIST, value.items))
        case MapValue():
            return hash((ValueKind.MAP, frozenset(value.entries)))
    raise TypeError(f"not a Value: {value!r}")


# ---------------------------------------------------------------------------
# Safe construction
# ---------------------------------------------------------------------------


def construct(kind: ValueKind | str, payload: Any = None) -> Result[Value]:
    """Build a Value of *kind* from a raw payload.

    Payload shapes: ``None`` (null), ``bool``, ``int``, ``(unscaled, scale)``
    (decimal), ``str``, a sequence of Values (list), a Mapping or sequence
    of ``(str, Value)`` pairs (map).
    """
    try:
        target = ValueKind(kind)
    except ValueError:
        return Result.failure(
            ValueErrorCode.INVALID_PAYLOAD,
            f"unknown value kind: {kind!r}",
            kind=str(kind),
        )

    problem: str | None
    match target:
        case ValueKind.NULL:
            problem = None if payload is None else "null takes no payload"
            if problem is None:
                return Result.success(NULL)
        case ValueKind.BOOLEAN:
            problem = _boolean_problem(payload)
            if problem is None:
                return Result.success(BooleanValue(payload))
        case ValueKind.INTEGER:
            problem = _integer_problem(payload)
            if problem is None:
                return Result.success(IntegerValue(payload))
        case ValueKind.DECIMAL:
            if not isinstance(payload, (tuple, list)) or len(payload) != 2:
                problem = "decimal payload must be an (unscaled, scale) pair"
            else:
                problem = _decimal_problem(payload[0], payload[1])
                if problem is None:
                    return Result.success(DecimalValue(payload[0], payload[1]))
        case ValueKind.TEXT:
            problem = _text_problem(payload)
            if problem is None:
                return Result.success(TextValue(payload))
        case ValueKind.LIST:
            if not isinstance(payload, (list, tuple)):
                problem = "list payload must be a sequence of Values"
            else:
                problem = _list_problem(payload)
                if problem is None:
                    return Result.success(ListValue(tuple(payload)))
        case ValueKind.MAP:
            entries = _normalize_entries(payload)
            if entries is None:
                problem = "map payload must be a mapping or a sequence of pairs"
            else:
                problem = _map_problem(entries)
                if problem is None:
                    return Result.success(MapValue(entries))

    return Result.failure(
        ValueErrorCode.INVALID_PAYLOAD,
        problem or "invalid payload",
        kind=str(target),
    )


# ---------------------------------------------------------------------------
# Literal helpers (raise UnwrapError on programmer error)
# ---------------------------------------------------------------------------


def null() -> NullValue:
    return NULL


def boolean(flag: bool) -> BooleanValue:
    return BooleanValue(flag)


def integer(n: int) -> IntegerValue:
    return IntegerValue(n)


def decimal(literal: str | tuple[int, int]) -> DecimalValue:
    """Build a Decimal from ``"12.50"`` or an ``(unscaled, scale)`` pair."""
    if isinstance(literal, str):
        from maytrix.value.numeric import parse_numeral

        parsed = parse_numeral(literal)
        if parsed is None:
            raise _reject(ValueKind.DECIMAL, f"not a numeral: {literal!r}")
        return DecimalValue(*parsed)
    return DecimalValue(*literal)


def text(s: str) -> TextValue:
    return TextValue(s)


def list_of(items: Iterable[Value]) -> ListValue:
    return ListValue(tuple(items))


def map_of(entries: Mapping[str, Value] | Sequence[tuple[str, Value]] = ()) -> MapValue:
    return MapValue(entries)  # type: ignore[arg-type]
