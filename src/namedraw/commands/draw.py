"""Command: draw a random winner."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namedraw.commands._base import DrawCommand

if TYPE_CHECKING:
    from namedraw.commands._context import AppContext


@click.command(
    cls=DrawCommand,
    examples=[
        ("{cmd}", "animated draw, winner in a panel"),
        ("{cmd} --no-animate", "skip the animation"),
        ("{prog} -q draw", "print only the winner"),
        ("{prog} --json draw", "full result as JSON"),
    ],
)
@click.option("--no-animate", is_flag=True, help="Skip the real-time animation.")
@click.pass_obj
def draw(app: AppContext, no_animate: bool) -> None:
    """Draw a random name from the pool."""
    app.emit(app.machine(realtime=not no_animate).draw())
