"""Value algebra: the foundation layer.

This layer depends only on stdlib and pydantic.
It must never import from domain, services, config, output or commands.
"""

from maytrix.value.convert import from_python, parse_json, to_python
from maytrix.value.errors import Failure, Result, UnwrapError, ValueErrorCode
from maytrix.value.kinds import NUMERIC_KINDS, Operator, Ordering, ValueKind
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
    boolean,
    construct,
    decimal,
    integer,
    list_of,
    map_of,
    null,
    text,
)
from maytrix.value.numeric import DEFAULT_DIVISION_SCALE, arithmetic
from maytrix.value.ops import coerce, compare, equals, index_get, path_get, render
from maytrix.value.symbol import Symbol

__all__ = [
    "DEFAULT_DIVISION_SCALE",
    "NULL",
    "NUMERIC_KINDS",
    "BooleanValue",
    "DecimalValue",
    "Failure",
    "IntegerValue",
    "ListValue",
    "MapValue",
    "NullValue",
    "Operator",
    "Ordering",
    "Result",
    "Symbol",
    "TextValue",
    "UnwrapError",
    "Value",
    "ValueErrorCode",
    "ValueKind",
    "arithmetic",
    "boolean",
    "coerce",
    "compare",
    "construct",
    "decimal",
    "equals",
    "from_python",
    "index_get",
    "integer",
    "list_of",
    "map_of",
    "null",
    "parse_json",
    "path_get",
    "render",
    "text",
    "to_python",
]
