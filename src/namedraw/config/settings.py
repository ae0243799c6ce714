"""DrawSettings: CLI flags, ``NAMEDRAW_*`` env vars and ``namedraw.toml``.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``NAMEDRAW_*``, nested with ``__`` (``NAMEDRAW_DRAW__SEED``)
  3. TOML file    — ``--config``, ``NAMEDRAW_CONFIG``, or ``namedraw.toml`` found by walk-up
  4. Code defaults — baked into the section models

Everything that can go wrong while resolving settings (unreadable TOML,
out-of-range timing, an explicit ``--config`` that does not exist)
surfaces from :meth:`DrawSettings.from_cli` as a ``click.ClickException``.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsError,
    TomlConfigSettingsSource,
)

from namedraw.config.discovery import find_config
from namedraw.config.models import DefaultsConfig, DrawConfig, PluginsConfig, StorageConfig

# The TOML file for the settings object currently being built.
_toml_file: ContextVar[Path | None] = ContextVar("namedraw_toml_file", default=None)


def _describe(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        where = ".".join(str(p) for p in err["loc"])
        parts.append(f"{where}: {err['msg']}" if where else err["msg"])
    return "; ".join(parts)


class DrawSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        root: Directory holding the ``.namedraw/`` state folder (parent
            of ``namedraw.toml``, or CWD if no config found).
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "NAMEDRAW_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    no_interact: bool = False

    # --- TOML sections ---
    draw: DrawConfig = Field(default_factory=DrawConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @property
    def state_dir(self) -> Path:
        """Directory for the state database and local plugins."""
        return self.root / self.storage.dirname

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml_file = _toml_file.get()
        if toml_file is None:
            return (init_settings, env_settings)
        return (init_settings, env_settings, TomlConfigSettingsSource(settings_cls, toml_file))

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        seed: int | None = None,
        **cli_flags: Any,
    ) -> DrawSettings:
        """Build settings for a CLI invocation.

        *root* defaults to the directory of the config file in effect,
        or the CWD. A *seed* overrides ``[draw] seed`` and keeps the
        other draw settings.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_file.set(toml_path)
        try:
            settings = cls(root=root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        except SettingsError as exc:
            raise click.ClickException(f"Cannot read settings: {exc}") from exc
        except ValidationError as exc:
            source = toml_path or "environment"
            raise click.ClickException(f"Invalid settings ({source}): {_describe(exc)}") from exc
        finally:
            _toml_file.reset(token)

        if seed is not None:
            draw = settings.draw.model_copy(update={"seed": seed})
            settings = settings.model_copy(update={"draw": draw})
        return settings
