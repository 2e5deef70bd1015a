"""Subcommand modules for kbcheck.

Provides register_commands(), which imports command modules lazily so
``kbcheck --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from kbcheck.commands.check import check

    cli.add_command(check)
