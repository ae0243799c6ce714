"""Command: show roster, pool, and history."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namedraw.commands._base import DrawCommand

if TYPE_CHECKING:
    from namedraw.commands._context import AppContext


@click.command(
    cls=DrawCommand,
    examples=[
        ("{cmd}", "roster, pool, options and history"),
        ("{prog} --json status", "the same as JSON"),
    ],
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show the roster, remaining pool, options, and draw history."""
    app.emit(app.machine().status())
