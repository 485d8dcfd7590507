"""Tests for ValueService."""

from __future__ import annotations

from pathlib import Path

from maytrix.config.settings import MaytrixSettings
from maytrix.services.algebra import ValueService


class TestParse:
    def test_decimal_literal(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).parse("12.50")
        assert result.ok
        assert result.data == {"kind": "decimal", "value": "12.50"}

    def test_structure(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).parse('{"a": [1, "x"]}')
        assert result.data == {"kind": "map", "value": '{"a": [1, "x"]}'}

    def test_invalid_json(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).parse("{oops")
        assert not result.ok
        assert result.op == "parse"
        assert result.error.code == "INVALID_PAYLOAD"
        assert result.error.detail["literal"] == "{oops"


class TestCoerce:
    def test_text_to_integer(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).coerce('"42"', "integer")
        assert result.ok
        assert result.data["input"] == {"kind": "text", "value": "42"}
        assert result.data["kind"] == "integer"
        assert result.data["value"] == "42"

    def test_failure(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).coerce("1.5", "integer")
        assert not result.ok
        assert result.error.code == "COERCION_ERROR"


class TestCompare:
    def test_numeric(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).compare("1", "1.00")
        assert result.data == {"left": "1", "right": "1.00", "ordering": "equal", "equal": True}

    def test_text(self, settings: MaytrixSettings) -> None:
        assert ValueService(settings).compare('"b"', '"a"').data["ordering"] == "greater"

    def test_incomparable(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).compare("[]", "[]")
        assert result.error.code == "INCOMPARABLE"


class TestCalculate:
    def test_integer_sum(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).calculate("2", "+", "3")
        assert result.data == {"expression": "2 + 3", "kind": "integer", "value": "5"}

    def test_division_uses_default_scale(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).calculate("10", "/", "4")
        assert result.data["kind"] == "decimal"
        assert result.data["value"] == "2"

    def test_division_uses_configured_scale(self, tmp_path: Path) -> None:
        (tmp_path / "maytrix.toml").write_text("[arithmetic]\ndivision_scale = 2\n")
        settings = MaytrixSettings.from_cli(search_root=tmp_path)
        result = ValueService(settings).calculate("10", "/", "4")
        assert result.data["value"] == "2.50"

    def test_division_by_zero(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).calculate("1", "/", "0")
        assert result.error.code == "DIVISION_BY_ZERO"

    def test_overflow(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).calculate("9223372036854775807", "+", "1")
        assert result.error.code == "OVERFLOW"

    def test_unknown_operator(self, settings: MaytrixSettings) -> None:
        result = ValueService(settings).calculate("1", "%", "2")
        assert result.error.code == "INVALID_OPERATOR"
