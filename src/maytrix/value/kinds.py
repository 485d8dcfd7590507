"""Value kinds, ordering, and numeric bounds."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class ValueKind(StrEnum):
    """The closed set of value variants."""

    NULL = "null"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DECIMAL = "decimal"
    TEXT = "text"
    LIST = "list"
    MAP = "map"


NUMERIC_KINDS: frozenset[ValueKind] = frozenset({ValueKind.INTEGER, ValueKind.DECIMAL})


class Ordering(IntEnum):
    """Result of a successful :func:`~maytrix.value.ops.compare`."""

    LESS = -1
    EQUAL = 0
    GREATER = 1


class Operator(StrEnum):
    """Arithmetic operators."""

    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"


INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def in_int64_range(n: int) -> bool:
    return INT64_MIN <= n <= INT64_MAX
