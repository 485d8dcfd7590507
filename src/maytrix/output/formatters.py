"""ServiceResult formatting — JSON, quiet, or Rich-rendered text.

The CLI renders ServiceResult for humans (Rich tables, colors) or
machines (--json). Renderers are dispatched by ``result.op``; unknown ops
fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from maytrix.output.console import create_console, get_output, style_for_outcome

if TYPE_CHECKING:
    from rich.console import Console

    from maytrix.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """How a result should be presented."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "value" in result.data:
        return str(result.data["value"])
    if "ordering" in result.data:
        return str(result.data["ordering"])
    return f"OK: {result.op}"


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, op: str) -> None:
    console.print(Text("OK", style="mx.ok"), Text(f"  {op}", style="mx.op"))


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, (dict, list)):
        value = _json.dumps(value, separators=(",", ":"), default=str)
    console.print(Text.assemble((f"  {key}: ", "mx.key"), str(value)))


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result.op)
    for key, value in result.data.items():
        _field(console, key, value)


def _outcome_table(report: dict[str, Any]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Rule", no_wrap=True)
    table.add_column("Outcome")
    table.add_column("Reason")
    for outcome in report.get("outcomes", []):
        status = str(outcome.get("status", ""))
        table.add_row(
            str(outcome.get("rule", "")),
            Text(status, style=style_for_outcome(status)),
            str(outcome.get("reason") or ""),
        )
    return table


def _render_evaluations(data: dict[str, Any], console: Console) -> None:
    for report in data.get("results", []):
        status = str(report.get("status", ""))
        style = "mx.ok" if status == "satisfied" else "mx.error"
        console.print(
            Text(f"  {report.get('entity_id', '?')} ", style="mx.id"),
            Text(status, style=style),
        )
        console.print(_outcome_table(report))


# ── Op renderers ──────────────────────────────────────────────────────


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, "validate")
    _render_evaluations(data, console)


def _render_rules(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    _status_line(console, "rules")
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("Rule", no_wrap=True)
    table.add_column("Depends on")
    if verbose:
        table.add_column("Description")
    for rule in data.get("rules", []):
        row = [rule["name"], ", ".join(rule["depends_on"])]
        if verbose:
            row.append(rule.get("description", ""))
        table.add_row(*row)
    console.print(table)
    _field(console, "schema", "yes" if data.get("has_schema") else "no")


def _render_value(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(
        Text(str(data.get("value", "")), style="bold"),
        Text(f"  ({data.get('kind')})", style="mx.key"),
    )
    if verbose and "input" in data:
        _field(console, "input", data["input"])
    if verbose and "expression" in data:
        _field(console, "expression", data["expression"])


def _render_compare(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    data = result.data
    console.print(Text(str(data.get("ordering", "")), style="bold"))
    if verbose:
        _field(console, "left", data.get("left"))
        _field(console, "right", data.get("right"))
        _field(console, "equal", data.get("equal"))


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    code = f" [{err.code}]" if err else ""
    console.print(
        Text("ERROR", style="mx.error"),
        Text(f"  {result.op}{code}", style="mx.op"),
        Text(" — "),
        Text(msg),
    )
    if err is None:
        return
    if result.op == "validate" and "results" in err.detail:
        _render_evaluations(err.detail, console)
    elif verbose and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


_OP_RENDERERS: dict[str, Callable[..., None]] = {
    "validate": _render_validate,
    "rules": _render_rules,
    "coerce": _render_value,
    "calculate": _render_value,
    "parse": _render_value,
    "compare": _render_compare,
}
