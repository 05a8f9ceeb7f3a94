"""Config file discovery and loading.

Walk-up finder locates solcfg.toml, similar to how git finds .git/.
Supports SOLCFG_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from solcfg.domain.errors import ConfigFileError

CONFIG_FILENAME = "solcfg.toml"
CONFIG_ENV_VAR = "SOLCFG_CONFIG"

# Table holding CLI settings rather than build declarations.
SETTINGS_TABLE = "solcfg"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for solcfg.toml.

    Returns the path to the config file, or None if not found.
    Checks SOLCFG_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML, raising ConfigFileError on malformed input."""
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigFileError(msg, path=str(path)) from exc


def split_declarations(data: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    """Separate ``(build declarations, [solcfg] settings table)``."""
    settings = data.get(SETTINGS_TABLE, {})
    if not isinstance(settings, dict):
        msg = f"[{SETTINGS_TABLE}] must be a table, got {type(settings).__name__}"
        raise ConfigFileError(msg, table=SETTINGS_TABLE)
    build = {key: value for key, value in data.items() if key != SETTINGS_TABLE}
    return build, settings