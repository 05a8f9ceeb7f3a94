"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``SOLCFG_*`` prefix
  3. TOML file: ``solcfg.toml`` discovered via walk-up
  4. Code defaults

The TOML file mixes two things: top-level build declarations, exposed
as :attr:`SolcfgSettings.build` for the resolver, and an optional
``[solcfg]`` table of CLI settings merged into the top level.
``SOLCFG_BUILD__*`` variables override individual build declarations
(see :mod:`solcfg.config.declarations`).
"""

from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, EnvSettingsSource, PydanticBaseSettingsSource

from solcfg.config.declarations import apply_overrides, env_overrides
from solcfg.config.discovery import find_config, read_toml, split_declarations


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``solcfg.toml`` file discovered via walk-up.

    Build declarations from the file are returned with *build_overrides*
    already applied.
    """

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        toml_path: Path | None,
        build_overrides: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(settings_cls)
        table: dict[str, Any] = {}
        build: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            build, table = split_declarations(read_toml(toml_path))
        if build_overrides:
            build = apply_overrides(build, build_overrides)
        self._data: dict[str, Any] = {**table, "build": build} if build or table else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


class FlagEnvSettingsSource(EnvSettingsSource):
    """``SOLCFG_*`` env vars for CLI settings only.

    Build declarations are overridden field by field through
    :class:`TomlSettingsSource`, so a whole ``SOLCFG_BUILD`` value is dropped.
    """

    def __call__(self) -> dict[str, Any]:
        data = super().__call__()
        data.pop("build", None)
        return data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class SolcfgSettings(BaseSettings):
    """Unified settings for the solcfg CLI.

    Attributes:
        project_root: Base directory for relative paths (parent of
            ``solcfg.toml``, or CWD if no config found).
        config_path: The config file in use, or None.
        build: Raw build declarations handed to the resolver.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SOLCFG_",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Build declarations (validated later by ConfigResolver) ---
    build: dict[str, Any] = Field(default_factory=dict)

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
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            FlagEnvSettingsSource(settings_cls),
            TomlSettingsSource(settings_cls, toml_path, env_overrides(os.environ)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> SolcfgSettings:
        """Construct settings from a CLI invocation.

        Discovers ``solcfg.toml`` via walk-up from *project_root* (or CWD)
        unless *config_path* is given, then derives the project root from
        the config file's parent directory when none was passed.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(project_root)

        resolved_root = project_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                project_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
