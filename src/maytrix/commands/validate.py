"""Command: evaluate a rules file against an entity file."""

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
  maytrix validate account.json rules.toml
  maytrix --json validate accounts.json rules.toml""",
)
@click.argument("entity_file", type=click.Path(path_type=Path))
@click.argument("rules_file", type=click.Path(path_type=Path))
@click.pass_obj
def validate(app: AppContext, entity_file: Path, rules_file: Path) -> None:
    """Evaluate RULES_FILE (TOML) against the entity or entities in ENTITY_FILE (JSON)."""
    from maytrix.services.validation import ValidationService

    app.emit(ValidationService(app.settings).validate(entity_file, rules_file))
