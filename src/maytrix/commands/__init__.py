"""Subcommand modules for maytrix.

Provides register_commands() which uses deferred imports to keep
``maytrix --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the ``value`` group and the standalone commands."""
    from maytrix.commands.rules import rules
    from maytrix.commands.validate import validate
    from maytrix.commands.value import value

    cli.add_command(value)
    cli.add_command(validate)
    cli.add_command(rules)
