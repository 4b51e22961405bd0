"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — values passed by the caller
  2. Env vars     — ``ENSUREKIT_*`` prefix
  3. TOML file    — ``[tool.ensurekit]`` of the nearest ``pyproject.toml``
  4. Code defaults

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`ensurekit.config.discovery`.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from ensurekit.config.discovery import load_config


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the discovered TOML table."""

    def __init__(self, settings_cls: type[BaseSettings], cwd: Path | None = None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = load_config(cwd=cwd)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the TOML data dict for Pydantic to merge."""
        return {k: v for k, v in self._data.items() if k in self.settings_cls.model_fields}


class EnsureSettings(BaseSettings):
    """Settings for ensurekit.

    Attributes:
        verbose: Enable DEBUG-level library logging.
        log_json: Render log records as JSON lines instead of console text.
        warn_on_returning_policy: Log a warning when an error policy
            returns normally instead of raising.
        load_entry_points: Discover plugin kinds from installed
            ``ensurekit.plugins`` entry points.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ENSUREKIT_",
        "extra": "ignore",
    }

    verbose: bool = False
    log_json: bool = False
    warn_on_returning_policy: bool = True
    load_entry_points: bool = True

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls),
        )
