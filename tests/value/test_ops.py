"""Tests for compare, render, coerce and traversal."""

from __future__ import annotations

import pytest

from maytrix.value import (
    NULL,
    BooleanValue,
    DecimalValue,
    IntegerValue,
    ListValue,
    Ordering,
    TextValue,
    Value,
    ValueErrorCode,
    ValueKind,
    coerce,
    compare,
    decimal,
    equals,
    index_get,
    list_of,
    map_of,
    path_get,
    render,
)
from maytrix.value.kinds import INT64_MAX


class TestCompare:
    def test_text_lexicographic(self) -> None:
        assert compare(TextValue("b"), TextValue("a")).value is Ordering.GREATER
        assert compare(TextValue("a"), TextValue("ab")).value is Ordering.LESS

    def test_text_by_code_point(self) -> None:
        assert compare(TextValue("Z"), TextValue("a")).value is Ordering.LESS

    def test_numeric_across_variants(self) -> None:
        assert compare(IntegerValue(1), decimal("1.00")).value is Ordering.EQUAL
        assert compare(decimal("2.5"), IntegerValue(3)).value is Ordering.LESS

    @pytest.mark.parametrize(
        ("left", "right"),
        [
            (ListValue(), ListValue()),
            (map_of(), map_of()),
            (BooleanValue(True), BooleanValue(False)),
            (NULL, NULL),
            (TextValue("1"), IntegerValue(1)),
        ],
    )
    def test_incomparable(self, left: Value, right: Value) -> None:
        result = compare(left, right)
        assert not result.ok
        assert result.error.code == ValueErrorCode.INCOMPARABLE

    def test_equals_delegates(self) -> None:
        assert equals(IntegerValue(2), decimal("2.0"))
        assert not equals(NULL, BooleanValue(False))


class TestRender:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (NULL, "null"),
            (BooleanValue(True), "true"),
            (IntegerValue(-12), "-12"),
            (decimal("12.50"), "12.50"),
            (decimal("-0.05"), "-0.05"),
            (DecimalValue(5, 0), "5"),
            (TextValue("plain"), "plain"),
        ],
    )
    def test_scalars(self, value: Value, expected: str) -> None:
        assert render(value) == expected

    def test_nested_text_is_quoted(self) -> None:
        value = list_of([TextValue("a"), IntegerValue(1)])
        assert render(value) == '["a", 1]'

    def test_map(self) -> None:
        value = map_of([("k", list_of([])), ("t", TextValue("x"))])
        assert render(value) == '{"k": [], "t": "x"}'


class TestCoerce:
    def test_identity(self) -> None:
        value = decimal("1.50")
        assert coerce(value, ValueKind.DECIMAL).value is value

    def test_integer_to_decimal(self) -> None:
        result = coerce(IntegerValue(7), "decimal").unwrap()
        assert isinstance(result, DecimalValue)
        assert (result.unscaled, result.scale) == (7, 0)

    def test_decimal_to_integer_exact(self) -> None:
        result = coerce(decimal("3.00"), "integer").unwrap()
        assert isinstance(result, IntegerValue)
        assert result.value == 3

    def test_decimal_with_fraction_fails(self) -> None:
        result = coerce(decimal("3.01"), "integer")
        assert result.error.code == ValueErrorCode.COERCION_ERROR

    def test_decimal_out_of_range_fails(self) -> None:
        result = coerce(DecimalValue(INT64_MAX + 1, 0), "integer")
        assert result.error.code == ValueErrorCode.COERCION_ERROR

    def test_boolean_to_integer(self) -> None:
        assert coerce(BooleanValue(True), "integer").value == IntegerValue(1)
        assert coerce(BooleanValue(False), "integer").value == IntegerValue(0)

    def test_integer_to_boolean(self) -> None:
        assert coerce(IntegerValue(1), "boolean").value == BooleanValue(True)
        assert coerce(IntegerValue(0), "boolean").value == BooleanValue(False)
        assert coerce(IntegerValue(2), "boolean").error.code == ValueErrorCode.COERCION_ERROR

    def test_text_to_numbers(self) -> None:
        assert coerce(TextValue("42"), "integer").value == IntegerValue(42)
        assert coerce(TextValue("3.00"), "integer").value == IntegerValue(3)
        parsed = coerce(TextValue("-1.250"), "decimal").unwrap()
        assert (parsed.unscaled, parsed.scale) == (-1250, 3)

    @pytest.mark.parametrize("literal", ["abc", "1e3", " 4", "4.5", "12\n"])
    def test_text_non_numeral_to_integer(self, literal: str) -> None:
        result = coerce(TextValue(literal), "integer")
        assert result.error.code == ValueErrorCode.COERCION_ERROR

    @pytest.mark.parametrize("literal", ["1.5\n", "1.5 ", "+"])
    def test_text_non_numeral_to_decimal(self, literal: str) -> None:
        result = coerce(TextValue(literal), "decimal")
        assert result.error.code == ValueErrorCode.COERCION_ERROR

    def test_anything_to_text(self) -> None:
        assert coerce(NULL, "text").value == TextValue("null")
        assert coerce(decimal("1.50"), "text").value == TextValue("1.50")
        assert coerce(list_of([TextValue("a")]), "text").value == TextValue('["a"]')

    @pytest.mark.parametrize(
        ("value", "target"),
        [
            (list_of([IntegerValue(1)]), "integer"),
            (IntegerValue(1), "list"),
            (map_of(), "boolean"),
            (TextValue("true"), "boolean"),
            (NULL, "integer"),
            (BooleanValue(True), "decimal"),
        ],
    )
    def test_undefined_coercions(self, value: Value, target: str) -> None:
        result = coerce(value, target)
        assert not result.ok
        assert result.error.code == ValueErrorCode.COERCION_ERROR

    def test_unknown_target(self) -> None:
        assert coerce(IntegerValue(1), "float").error.code == ValueErrorCode.COERCION_ERROR


class TestPathGet:
    def _nested(self) -> Value:
        return map_of(
            {
                "address": map_of({"city": TextValue("Oslo")}),
                "tags": list_of([TextValue("a")]),
            }
        )

    def test_nested_lookup(self) -> None:
        assert path_get(self._nested(), ["address", "city"]).value == TextValue("Oslo")

    def test_empty_path_returns_map(self) -> None:
        root = self._nested()
        assert path_get(root, []).value == root

    def test_missing_key(self) -> None:
        result = path_get(self._nested(), ["address", "zip"])
        assert result.error.code == ValueErrorCode.PATH_NOT_FOUND
        assert result.error.detail["segment"] == "zip"

    def test_does_not_descend_into_lists(self) -> None:
        result = path_get(self._nested(), ["tags", "0"])
        assert result.error.code == ValueErrorCode.PATH_NOT_FOUND

    def test_non_map_root(self) -> None:
        assert not path_get(IntegerValue(1), []).ok
        assert not path_get(IntegerValue(1), ["a"]).ok


class TestIndexGet:
    def test_in_range(self) -> None:
        value = list_of([IntegerValue(1), IntegerValue(2)])
        assert index_get(value, 1).value == IntegerValue(2)

    @pytest.mark.parametrize("index", [2, -1])
    def test_out_of_range(self, index: int) -> None:
        result = index_get(list_of([IntegerValue(1), IntegerValue(2)]), index)
        assert result.error.code == ValueErrorCode.PATH_NOT_FOUND

    def test_not_a_list(self) -> None:
        assert index_get(map_of(), 0).error.code == ValueErrorCode.PATH_NOT_FOUND
