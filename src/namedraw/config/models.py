"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, namedraw.toml only contains
overrides. A fresh directory needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

# --- namedraw.toml sections ---


class DrawConfig(BaseModel):
    """[draw] section — animation timing in milliseconds."""

    model_config = {"frozen": True}

    min_duration_ms: int = Field(default=1400, gt=0)
    max_duration_ms: int = Field(default=2100, gt=0)
    min_tick_ms: int = Field(default=45, gt=0)
    max_tick_ms: int = Field(default=70, gt=0)
    seed: int | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> DrawConfig:
        if self.min_duration_ms > self.max_duration_ms:
            msg = "draw.min_duration_ms must not exceed draw.max_duration_ms"
            raise ValueError(msg)
        if self.min_tick_ms > self.max_tick_ms:
            msg = "draw.min_tick_ms must not exceed draw.max_tick_ms"
            raise ValueError(msg)
        return self


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    key: str = "namedraw.session.v1"
    dirname: str = ".namedraw"


class DefaultsConfig(BaseModel):
    """[defaults] section — flags for a fresh session."""

    model_config = {"frozen": True}

    no_repeat: bool = True
    sound: bool = False


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    sound: bool = True
    local: bool = True
    disabled: list[str] = Field(default_factory=list)


class DrawerConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    draw: DrawConfig = Field(default_factory=DrawConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
