"""Click classes that carry worked examples for each namedraw command.

Examples are ``(invocation, note)`` pairs. The invocation is a template:
``{cmd}`` expands to the command's full path as typed (``namedraw
roster set``) and ``{prog}`` to the program name alone, for examples
that need global flags before the subcommand.

``--examples`` on a command prints its own list; on a group it also
prints every subcommand's, so ``namedraw --examples`` is the whole
cookbook.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import click

Example = tuple[str, str]


def format_examples(ctx: click.Context, examples: Sequence[Example]) -> list[str]:
    """Expand templates for *ctx* and align the notes into one column."""
    prog = ctx.find_root().info_name or "namedraw"
    lines = [(inv.format(prog=prog, cmd=ctx.command_path), note) for inv, note in examples]
    width = max((len(inv) for inv, _ in lines), default=0)
    return [f"  {inv:<{width}}  # {note}" if note else f"  {inv}" for inv, note in lines]


def _collect(ctx: click.Context, cmd: click.Command) -> list[tuple[str, list[str]]]:
    """``(command_path, lines)`` for *cmd* and, for groups, each subcommand in turn."""
    sections: list[tuple[str, list[str]]] = []
    own = getattr(cmd, "examples", ())
    if own:
        sections.append((ctx.command_path, format_examples(ctx, own)))
    if isinstance(cmd, click.Group):
        for name in cmd.list_commands(ctx):
            sub = cmd.get_command(ctx, name)
            if sub is None or sub.hidden:
                continue
            sub_ctx = click.Context(sub, info_name=name, parent=ctx)
            sections.extend(_collect(sub_ctx, sub))
    return sections


def _show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
    if not value or ctx.resilient_parsing:
        return
    sections = _collect(ctx, ctx.command)
    if not sections:
        click.echo(f"No examples for '{ctx.command_path}'.")
    for i, (path, lines) in enumerate(sections):
        if i:
            click.echo()
        click.echo(f"Examples for '{path}':")
        click.echo("\n".join(lines))
    ctx.exit(0)


def _examples_option() -> click.Option:
    return click.Option(
        ["--examples"],
        is_flag=True,
        expose_value=False,
        is_eager=True,
        callback=_show_examples,
        help="Show usage examples and exit.",
    )


class DrawCommand(click.Command):
    """A namedraw subcommand with an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        self.params.append(_examples_option())


class DrawGroup(click.Group):
    """A namedraw command group; ``--examples`` covers its subcommands too.

    Subcommands default to :class:`DrawCommand`, so ``examples=`` works
    without ``cls=``.
    """

    command_class = DrawCommand

    def __init__(self, *args: Any, examples: Sequence[Example] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        self.params.append(_examples_option())
