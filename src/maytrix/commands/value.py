"""Commands: the value algebra over JSON literals."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from maytrix.commands._base import MaytrixGroup
from maytrix.value import Operator, ValueKind

if TYPE_CHECKING:
    from maytrix.commands._context import AppContext


@click.group(
    cls=MaytrixGroup,
    examples="""\
  maytrix value parse '{"a": [1, 2.50]}'
  maytrix value coerce '"42"' integer
  maytrix value compare 1 1.00
  maytrix value calc 10 / 4""",
)
def value() -> None:
    """Coerce, compare and combine values given as JSON literals."""


@value.command()
@click.argument("literal")
@click.pass_obj
def parse(app: AppContext, literal: str) -> None:
    """Parse LITERAL and show its kind and canonical rendering."""
    from maytrix.services.algebra import ValueService

    app.emit(ValueService(app.settings).parse(literal))


@value.command()
@click.argument("literal")
@click.argument("target", type=click.Choice([str(k) for k in ValueKind]))
@click.pass_obj
def coerce(app: AppContext, literal: str, target: str) -> None:
    """Coerce LITERAL to the TARGET kind."""
    from maytrix.services.algebra import ValueService

    app.emit(ValueService(app.settings).coerce(literal, target))


@value.command()
@click.argument("left")
@click.argument("right")
@click.pass_obj
def compare(app: AppContext, left: str, right: str) -> None:
    """Order LEFT against RIGHT (numbers or text only)."""
    from maytrix.services.algebra import ValueService

    app.emit(ValueService(app.settings).compare(left, right))


@value.command()
@click.argument("left")
@click.argument("operator", type=click.Choice([str(o) for o in Operator]))
@click.argument("right")
@click.pass_obj
def calc(app: AppContext, left: str, operator: str, right: str) -> None:
    """Apply OPERATOR (+ - * /) to LEFT and RIGHT."""
    from maytrix.services.algebra import ValueService

    app.emit(ValueService(app.settings).calculate(left, operator, right))
