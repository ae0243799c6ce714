"""Command group: toggle session options."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from namedraw.commands._base import DrawGroup

if TYPE_CHECKING:
    from namedraw.commands._context import AppContext

_SWITCH = click.Choice(["on", "off"], case_sensitive=False)


@click.group(cls=DrawGroup)
def option() -> None:
    """Toggle no-repeat and sound options."""


@option.command(
    name="no-repeat",
    examples=[
        ("{cmd} on", "each name wins once per round"),
        ("{cmd} off", "names can win again"),
    ],
)
@click.argument("state", type=_SWITCH)
@click.pass_obj
def no_repeat(app: AppContext, state: str) -> None:
    """Exclude already drawn names until the draw is reset."""
    app.emit(app.machine().set_no_repeat(state.lower() == "on"))


@option.command(
    name="sound",
    examples=[
        ("{cmd} on", "cue on every tick"),
        ("{cmd} off", "silent draws"),
    ],
)
@click.argument("state", type=_SWITCH)
@click.pass_obj
def sound(app: AppContext, state: str) -> None:
    """Ring a cue on each animation tick."""
    app.emit(app.machine().set_sound(state.lower() == "on"))
