"""Tests for Rich Console factory and theme."""

from __future__ import annotations

from io import StringIO

from maytrix.output.console import MAYTRIX_THEME, create_console, get_output, style_for_outcome


class TestCreateConsole:
    def test_returns_console_with_stringio(self) -> None:
        assert isinstance(create_console().file, StringIO)

    def test_no_color_disables_ansi(self) -> None:
        console = create_console(no_color=True)
        console.print("[mx.error]boom[/mx.error]")
        output = get_output(console)
        assert "\x1b" not in output
        assert "boom" in output

    def test_widths(self) -> None:
        assert create_console().width == 120
        assert create_console(width=80).width == 80


class TestStyleForOutcome:
    def test_known(self) -> None:
        assert style_for_outcome("pass") == "mx.outcome.pass"
        assert style_for_outcome("fail") == "mx.outcome.fail"
        assert style_for_outcome("inapplicable") == "mx.outcome.inapplicable"

    def test_unknown(self) -> None:
        assert style_for_outcome("other") == ""

    def test_theme_defines_styles(self) -> None:
        assert "mx.outcome.fail" in MAYTRIX_THEME.styles
