"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Constructor arguments
  2. Environment variables  (PAGECACHE__CACHE__TTL_MS=60000)
  3. pagecache.yaml         (searched in cwd, then the platform config dir)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

_APP_NAME = "pagecache"
_CONFIG_FILENAME = "pagecache.yaml"
_DEFAULT_CONFIG_DIR = platformdirs.user_config_dir(_APP_NAME)


def _find_config_file() -> str | None:
    """Return the path of the first pagecache.yaml found, or None."""
    candidates = [
        Path(_CONFIG_FILENAME),
        Path(_DEFAULT_CONFIG_DIR) / _CONFIG_FILENAME,
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class GetMode(StrEnum):
    """How content is obtained on a cache miss."""

    FETCH = "fetch"  # same-origin fetch() from inside the current document
    NAVIGATE = "navigate"  # full page.goto() and serialise the root element


class CacheSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    directory: str = ".cache"
    ttl_ms: int = 15 * 60 * 1000
    mode: GetMode = GetMode.NAVIGATE

    @field_validator("ttl_ms")
    @classmethod
    def validate_ttl_ms(cls, v: int) -> int:
        if v < 0:
            raise ValueError("ttl_ms must be >= 0")
        return v


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: PAGECACHE__CACHE__MODE=fetch
        env_prefix="PAGECACHE__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    cache: CacheSettings = CacheSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls),
            # dotenv and file secrets intentionally excluded
        )
