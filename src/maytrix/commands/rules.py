"""Command: load a rules file and list what it declares."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from maytrix.commands._base import MaytrixCommand

if TYPE_CHECKING:
    from maytrix.commands._context import AppContext


@click.command(
    cls=MaytrixCommand,
    examples="""\
  maytrix rules rules.toml
  maytrix -v rules rules.toml""",
)
@click.argument("rules_file", type=click.Path(path_type=Path))
@click.pass_obj
def rules(app: AppContext, rules_file: Path) -> None:
    """Check RULES_FILE and list its rules and field dependencies."""
    from maytrix.services.validation import ValidationService

    app.emit(ValidationService(app.settings).describe_rules(rules_file))
