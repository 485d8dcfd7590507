"""Tests for the value variants, construct(), equality and hashing."""

from __future__ import annotations

import dataclasses

import pytest

from maytrix.value import (
    NULL,
    BooleanValue,
    DecimalValue,
    IntegerValue,
    ListValue,
    MapValue,
    NullValue,
    TextValue,
    UnwrapError,
    ValueErrorCode,
    ValueKind,
    construct,
    decimal,
    list_of,
    map_of,
)
from maytrix.value.kinds import INT64_MAX, INT64_MIN


class TestConstruct:
    def test_null(self) -> None:
        result = construct(ValueKind.NULL)
        assert result.ok
        assert result.value is NULL

    def test_null_rejects_payload(self) -> None:
        result = construct("null", 1)
        assert not result.ok
        assert result.error.code == ValueErrorCode.INVALID_PAYLOAD

    def test_integer_bounds(self) -> None:
        assert construct("integer", INT64_MAX).ok
        assert construct("integer", INT64_MIN).ok
        over = construct("integer", INT64_MAX + 1)
        assert not over.ok
        assert over.error.code == ValueErrorCode.INVALID_PAYLOAD

    def test_integer_rejects_bool(self) -> None:
        assert not construct("integer", True).ok

    def test_decimal_pair(self) -> None:
        result = construct("decimal", (1250, 2))
        assert result.ok
        assert result.value == DecimalValue(1250, 2)
        assert result.value.scale == 2

    def test_decimal_negative_scale(self) -> None:
        result = construct("decimal", (5, -1))
        assert not result.ok
        assert result.error.code == ValueErrorCode.INVALID_PAYLOAD
        assert "scale" in result.error.message

    def test_decimal_needs_pair(self) -> None:
        assert not construct("decimal", 5).ok

    def test_text(self) -> None:
        assert construct("text", "hi").value == TextValue("hi")
        assert not construct("text", 3).ok

    def test_list_requires_values(self) -> None:
        assert construct("list", [IntegerValue(1), NULL]).ok
        result = construct("list", [1, 2])
        assert not result.ok
        assert "element 0" in result.error.message

    def test_map_from_mapping(self) -> None:
        result = construct("map", {"a": IntegerValue(1), "b": TextValue("x")})
        assert result.ok
        assert result.value.keys() == ("a", "b")

    def test_map_duplicate_keys(self) -> None:
        result = construct("map", [("a", IntegerValue(1)), ("a", IntegerValue(2))])
        assert not result.ok
        assert result.error.code == ValueErrorCode.INVALID_PAYLOAD
        assert "duplicate" in result.error.message

    def test_map_non_text_key(self) -> None:
        assert not construct("map", [(1, IntegerValue(1))]).ok

    def test_unknown_kind(self) -> None:
        result = construct("colour", "red")
        assert not result.ok
        assert result.error.detail["kind"] == "colour"


class TestDirectInstantiation:
    def test_invalid_integer_raises(self) -> None:
        with pytest.raises(UnwrapError) as excinfo:
            IntegerValue(2**63)
        assert excinfo.value.failure.code == ValueErrorCode.INVALID_PAYLOAD

    def test_invalid_decimal_raises(self) -> None:
        with pytest.raises(UnwrapError):
            DecimalValue(1, -2)

    def test_decimal_literal_with_trailing_newline_raises(self) -> None:
        with pytest.raises(UnwrapError):
            decimal("1.5\n")

    def test_boolean_requires_bool(self) -> None:
        with pytest.raises(UnwrapError):
            BooleanValue(1)  # type: ignore[arg-type]

    def test_list_coerced_to_tuple(self) -> None:
        value = ListValue([IntegerValue(1)])  # type: ignore[arg-type]
        assert isinstance(value.items, tuple)
        assert len(value) == 1

    def test_values_are_frozen(self) -> None:
        value = IntegerValue(1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.value = 2  # type: ignore[misc]


class TestEquality:
    def test_integer_equals_decimal_by_value(self) -> None:
        assert IntegerValue(3) == DecimalValue(300, 2)
        assert DecimalValue(150, 2) == DecimalValue(15, 1)

    def test_scale_preserved_despite_equality(self) -> None:
        assert DecimalValue(150, 2).scale == 2

    def test_cross_variant_unequal(self) -> None:
        assert IntegerValue(1) != BooleanValue(True)
        assert IntegerValue(0) != NULL
        assert TextValue("1") != IntegerValue(1)

    def test_null_equals_only_null(self) -> None:
        assert NullValue() == NULL
        assert NULL != TextValue("")

    def test_list_elementwise(self) -> None:
        assert list_of([IntegerValue(1), TextValue("a")]) == list_of([DecimalValue(10, 1), TextValue("a")])
        assert list_of([IntegerValue(1)]) != list_of([IntegerValue(1), IntegerValue(1)])

    def test_map_ignores_insertion_order(self) -> None:
        a = map_of({"x": IntegerValue(1), "y": IntegerValue(2)})
        b = map_of({"y": IntegerValue(2), "x": IntegerValue(1)})
        assert a == b

    def test_hash_consistent_with_equality(self) -> None:
        assert hash(IntegerValue(3)) == hash(DecimalValue(3000, 3))
        assert len({IntegerValue(1), DecimalValue(10, 1), DecimalValue(1, 0)}) == 1

    def test_not_equal_to_plain_python(self) -> None:
        assert IntegerValue(1) != 1


class TestMapValue:
    def test_insertion_order(self) -> None:
        value = map_of([("b", NULL), ("a", NULL)])
        assert value.keys() == ("b", "a")

    def test_get_and_contains(self) -> None:
        value = map_of({"a": IntegerValue(1)})
        assert value.get("a") == IntegerValue(1)
        assert value.get("b") is None
        assert "a" in value

    def test_with_entry_replaces_in_place(self) -> None:
        value = map_of([("a", IntegerValue(1)), ("b", IntegerValue(2))])
        updated = value.with_entry("a", IntegerValue(9))
        assert updated.keys() == ("a", "b")
        assert updated.get("a") == IntegerValue(9)
        assert value.get("a") == IntegerValue(1)

    def test_with_entry_appends(self) -> None:
        updated = map_of({"a": NULL}).with_entry("z", TextValue("t"))
        assert updated.keys() == ("a", "z")

    def test_duplicate_pairs_raise(self) -> None:
        with pytest.raises(UnwrapError):
            MapValue((("a", NULL), ("a", NULL)))


class TestLiteralHelpers:
    def test_decimal_from_numeral(self) -> None:
        value = decimal("12.50")
        assert (value.unscaled, value.scale) == (1250, 2)

    def test_decimal_from_pair(self) -> None:
        assert decimal((-5, 2)) == DecimalValue(-5, 2)

    def test_decimal_rejects_garbage(self) -> None:
        with pytest.raises(UnwrapError):
            decimal("1e3")

    def test_decimal_properties(self) -> None:
        assert decimal("-0.50").sign == -1
        assert decimal("2.00").has_fraction is False
        assert decimal("2.01").has_fraction is True

    def test_is_numeric(self) -> None:
        assert IntegerValue(1).is_numeric
        assert decimal("1.5").is_numeric
        assert not TextValue("1").is_numeric
