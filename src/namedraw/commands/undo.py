"""Command: undo the most recent draw."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namedraw.commands._base import DrawCommand

if TYPE_CHECKING:
    from namedraw.commands._context import AppContext


@click.command(
    cls=DrawCommand,
    examples=[
        ("{cmd}", "put the last winner back in the pool"),
        ("{prog} --json undo", "the same as JSON"),
    ],
)
@click.pass_obj
def undo(app: AppContext) -> None:
    """Undo the last draw and return the name to the pool."""
    app.emit(app.machine().undo())
