"""Allow ``python -m maytrix``."""

from maytrix.cli import cli

cli()
