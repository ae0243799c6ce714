"""Subcommand modules for namedraw.

Provides register_commands(), which uses deferred imports to keep
``namedraw --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from namedraw.commands.option import option
    from namedraw.commands.roster import roster

    cli.add_command(roster)
    cli.add_command(option)

    # --- Standalone commands ---
    from namedraw.commands.draw import draw
    from namedraw.commands.reset import reset
    from namedraw.commands.status import status
    from namedraw.commands.undo import undo

    cli.add_command(draw)
    cli.add_command(undo)
    cli.add_command(reset)
    cli.add_command(status)
