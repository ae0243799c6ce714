"""Shared pytest fixtures and test helpers for namedraw tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from namedraw.config.settings import DrawSettings
from namedraw.infrastructure.scheduler import CooperativeScheduler
from namedraw.infrastructure.workspace import Workspace
from namedraw.plugins.hookspecs import hookimpl
from namedraw.plugins.manager import PluginManager
from namedraw.services.draw import DrawMachine


class FixedRandom:
    """Deterministic random source: always ``lo + offset`` (clamped), with a call log."""

    def __init__(self, offset: int = 0) -> None:
        self.offset = offset
        self.calls: list[tuple[int, int]] = []

    def randint(self, lo: int, hi: int) -> int:
        self.calls.append((lo, hi))
        return min(lo + self.offset, hi)


class RecordingPlugin:
    """Captures every hook call as ``(hook_name, kwargs)``."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def named(self, hook_name: str) -> list[dict[str, Any]]:
        return [kwargs for name, kwargs in self.events if name == hook_name]

    @hookimpl
    def post_state_change(self, op: str, snapshot: dict[str, Any]) -> None:
        self.events.append(("post_state_change", {"op": op, "snapshot": snapshot}))

    @hookimpl
    def on_draw_start(self, pool_size: int, duration_ms: int, tick_ms: int) -> None:
        self.events.append(
            ("on_draw_start", {"pool_size": pool_size, "duration_ms": duration_ms, "tick_ms": tick_ms})
        )

    @hookimpl
    def on_tick(self, candidate: str, progress: float, frequency: int, sound: bool) -> None:
        self.events.append(
            (
                "on_tick",
                {"candidate": candidate, "progress": progress, "frequency": frequency, "sound": sound},
            )
        )

    @hookimpl
    def on_winner(self, winner: str, snapshot: dict[str, Any]) -> None:
        self.events.append(("on_winner", {"winner": winner, "snapshot": snapshot}))

    @hookimpl
    def on_attention(self, reason: str) -> None:
        self.events.append(("on_attention", {"reason": reason}))


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's NAMEDRAW_* environment out of the tests."""
    monkeypatch.delenv("NAMEDRAW_CONFIG", raising=False)
    monkeypatch.delenv("NAMEDRAW_ROOT", raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> DrawSettings:
    return DrawSettings.from_cli(root=tmp_path)


@pytest.fixture
def scheduler() -> CooperativeScheduler:
    """Virtual-clock scheduler (no real sleeping)."""
    return CooperativeScheduler()


@pytest.fixture
def rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def recorder() -> RecordingPlugin:
    return RecordingPlugin()


@pytest.fixture
def workspace(
    settings: DrawSettings,
    scheduler: CooperativeScheduler,
    rng: FixedRandom,
    recorder: RecordingPlugin,
) -> Iterator[Workspace]:
    """Workspace on a temp directory with deterministic capabilities."""
    plugins = PluginManager()
    plugins.add(recorder, name="recorder")
    ws = Workspace(settings, scheduler=scheduler, random_source=rng, plugins=plugins)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def machine(workspace: Workspace) -> Iterator[DrawMachine]:
    m = DrawMachine(workspace)
    try:
        yield m
    finally:
        m.close()


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI keeps its state there.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test classes.
    """
    monkeypatch.chdir(tmp_path)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def save_roster(machine: DrawMachine, *names: str) -> dict[str, Any]:
    """Save a roster via DrawMachine, asserting success."""
    result = machine.set_roster("\n".join(names))
    assert result.ok, result.error
    return result.data


def draw_winner(machine: DrawMachine) -> str:
    """Run one full draw, asserting a winner was committed."""
    result = machine.draw()
    assert result.ok, result.error
    assert not result.blocked, result.warnings
    return result.data["winner"]
