"""Command group: save and show the participant roster."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from namedraw.commands._base import DrawGroup

if TYPE_CHECKING:
    from namedraw.commands._context import AppContext


@click.group(cls=DrawGroup)
def roster() -> None:
    """Manage the roster of names to draw from."""


@roster.command(
    name="set",
    examples=[
        ("{cmd} Kim Lee Park", "one name per argument"),
        ('{cmd} "Kim, Lee" Park', "commas split names too"),
        ("{cmd} --file team.txt", "one name per line"),
        ("cat team.txt | {cmd} --file -", "read from stdin"),
    ],
)
@click.argument("names", nargs=-1)
@click.option(
    "--file",
    "names_file",
    type=click.File("r", encoding="utf-8"),
    default=None,
    help="Read names from a file ('-' for stdin); newline or comma separated.",
)
@click.pass_obj
def set_roster(app: AppContext, names: tuple[str, ...], names_file: TextIO | None) -> None:
    """Save a new roster (clears draw history). Needs at least two names."""
    parts = list(names)
    if names_file is not None:
        parts.append(names_file.read())
    if not parts:
        raise click.UsageError("Provide names as arguments or with --file.")

    app.emit(app.machine().set_roster("\n".join(parts)))


@roster.command(
    name="show",
    examples=[
        ("{cmd}", "count and names"),
        ("{prog} -q roster show > team.txt", "names only, ready to edit"),
    ],
)
@click.pass_obj
def show_roster(app: AppContext) -> None:
    """Show the saved roster, one name per line."""
    app.emit(app.machine().roster())
