"""Command: reset the draw, or everything."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namedraw.commands._base import DrawCommand

if TYPE_CHECKING:
    from namedraw.commands._context import AppContext


@click.command(
    cls=DrawCommand,
    examples=[
        ("{cmd}", "clear history, keep roster and options"),
        ("{cmd} --all", "start over (asks first)"),
        ("{cmd} --all --yes", "start over without asking"),
    ],
)
@click.option("--all", "reset_everything", is_flag=True, help="Delete names, settings, and history.")
@click.option("-y", "--yes", is_flag=True, help="Skip the confirmation prompt for --all.")
@click.pass_obj
def reset(app: AppContext, reset_everything: bool, yes: bool) -> None:
    """Clear draw history and restore the pool (roster and options are kept)."""
    machine = app.machine()
    if not reset_everything:
        app.emit(machine.reset_draw())
        return

    confirmed = yes
    if not confirmed and not app.settings.no_interact:
        confirmed = click.confirm(
            "Really reset everything? (names, options, and history are deleted)",
            default=False,
            err=True,
        )
    app.emit(machine.reset_all(confirmed=confirmed))
