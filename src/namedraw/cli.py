"""Root CLI group for namedraw with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from namedraw import __version__
from namedraw.commands import register_commands
from namedraw.commands._base import DrawGroup
from namedraw.commands._context import AppContext
from namedraw.config.settings import DrawSettings


@click.group(name="namedraw", cls=DrawGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="namedraw")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--no-interact", is_flag=True, help="Non-interactive mode (no prompts).")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding the .namedraw state folder.",
)
@click.option("--seed", type=int, default=None, help="Seed the random source.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    root: Path | None,
    seed: int | None,
) -> None:
    """namedraw — draw random names for lunch roulette and friends."""
    settings = DrawSettings.from_cli(
        config_path=config_path,
        root=root,
        seed=seed,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        no_interact=no_interact,
    )
    app = AppContext(settings)
    ctx.obj = app
    ctx.call_on_close(app.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
