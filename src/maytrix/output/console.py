"""Rich Console factory and theme for maytrix output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MAYTRIX_THEME = Theme(
    {
        "mx.ok": "bold green",
        "mx.error": "bold red",
        "mx.warning": "bold yellow",
        "mx.op": "bold cyan",
        "mx.key": "dim",
        "mx.id": "bold blue",
        "mx.outcome.pass": "green",
        "mx.outcome.fail": "red",
        "mx.outcome.inapplicable": "dim",
    }
)

_OUTCOME_STYLES: dict[str, str] = {
    "pass": "mx.outcome.pass",
    "fail": "mx.outcome.fail",
    "inapplicable": "mx.outcome.inapplicable",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=MAYTRIX_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_outcome(status: str) -> str:
    """Return the Rich style name for a rule outcome status."""
    return _OUTCOME_STYLES.get(status, "")
