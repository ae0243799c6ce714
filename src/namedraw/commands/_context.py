"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy workspace/machine construction and
centralized result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

import click

from namedraw.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from namedraw.config.settings import DrawSettings
    from namedraw.infrastructure.workspace import Workspace
    from namedraw.services.draw import DrawMachine
    from namedraw.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The workspace is created on first use so ``--help`` and
    ``--version`` never touch the state database.
    """

    def __init__(self, settings: DrawSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None
        self._machine: DrawMachine | None = None

        from namedraw.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, quiet=settings.quiet, log_json=settings.log_json
        )

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def machine(self, *, realtime: bool = False) -> DrawMachine:
        """The draw machine (created lazily on first access).

        With *realtime* the scheduler sleeps between timers and, for
        human output, a live ticker is shown on stderr.
        """
        if self._machine is None:
            from namedraw.infrastructure.database.engine import StateDirectoryError
            from namedraw.infrastructure.scheduler import CooperativeScheduler
            from namedraw.infrastructure.workspace import Workspace
            from namedraw.output.presenter import TickerPresenter
            from namedraw.plugins.builtins.sound import SoundCuePlugin
            from namedraw.services.draw import DrawMachine

            scheduler = CooperativeScheduler(sleep=time.sleep if realtime else None)
            workspace = Workspace(self.settings, scheduler=scheduler)

            builtins: list[object] = []
            if self.settings.plugins.sound:
                builtins.append(SoundCuePlugin())
            out = self.output_settings
            if realtime and not (out.json_output or out.quiet):
                builtins.append(TickerPresenter())
            workspace.load_plugins(*builtins)

            self._workspace = workspace
            try:
                self._machine = DrawMachine(workspace)
            except StateDirectoryError as exc:
                raise click.ClickException(str(exc)) from exc
        return self._machine

    def close(self) -> None:
        """Cancel any outstanding draw and release the database."""
        if self._machine is not None:
            self._machine.close()
        if self._workspace is not None:
            self._workspace.close()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``, including blocked no-ops): writes to
          stdout. Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = self.output_settings
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
