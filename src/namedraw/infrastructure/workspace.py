"""Workspace — the dependency bundle injected into the draw machine.

The Workspace owns the state database engine and session store, and
carries the scheduling, randomness, and plugin capabilities. Tests
build one with a virtual-clock scheduler and a scripted random source;
the CLI builds one with real-time pacing.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from namedraw.domain.session import Session
from namedraw.infrastructure.database.engine import init_database
from namedraw.infrastructure.randomness import RandomSource, SystemRandomSource
from namedraw.infrastructure.scheduler import CooperativeScheduler, Scheduler
from namedraw.infrastructure.store import SessionStore
from namedraw.plugins.manager import PluginManager

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from namedraw.config.settings import DrawSettings

logger = logging.getLogger(__name__)


class Workspace:
    """Settings plus the capabilities the draw machine calls into.

    Parameters:
        settings: Resolved settings (root directory, draw timing, storage key).
        scheduler: Timer capability; defaults to a virtual-clock scheduler.
        random_source: Randomness capability; defaults to a ``random.Random``
            seeded from ``[draw] seed``.
        plugins: Plugin manager; defaults to an empty one honouring
            ``[plugins] disabled``.
    """

    def __init__(
        self,
        settings: DrawSettings,
        *,
        scheduler: Scheduler | None = None,
        random_source: RandomSource | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self.settings = settings
        self.scheduler: Scheduler = scheduler or CooperativeScheduler()
        self.random: RandomSource = random_source or SystemRandomSource(settings.draw.seed)
        self.plugins = plugins or PluginManager(disabled=settings.plugins.disabled)
        self._engine: Engine | None = None
        self._store: SessionStore | None = None

    @property
    def root(self) -> Path:
        return self.settings.root

    @property
    def engine(self) -> Engine:
        """State database engine (created lazily on first access).

        Raises :class:`~namedraw.infrastructure.database.engine.StateDirectoryError`
        when the state directory is unusable.
        """
        if self._engine is None:
            self._engine = init_database(self.settings.state_dir)
        return self._engine

    @property
    def store(self) -> SessionStore:
        if self._store is None:
            self._store = SessionStore(
                self.engine,
                key=self.settings.storage.key,
                defaults=self.default_session(),
            )
        return self._store

    def default_session(self) -> Session:
        """Fresh session using the configured default flags."""
        defaults = self.settings.defaults
        return Session(no_repeat=defaults.no_repeat, sound=defaults.sound)

    def load_plugins(self, *builtins: object) -> list[str]:
        """Register *builtins*, then installed and local plugins. Returns all names."""
        for plugin in builtins:
            self.plugins.add(plugin)
        self.plugins.load_installed()
        if self.settings.plugins.local:
            self.plugins.load_local(self.settings.state_dir / "plugins")
        names = self.plugins.names
        logger.debug("Loaded plugins: %s", ", ".join(names) or "(none)")
        return names

    def close(self) -> None:
        """Dispose of the database engine."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self._store = None
