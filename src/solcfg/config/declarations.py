"""Environment overrides for build declarations.

``SOLCFG_BUILD__<FIELD>`` variables override what ``solcfg.toml`` declares.
Environment names are case-insensitive, so each variable is mapped back to
a canonical declaration key. Values are parsed as JSON when possible
(``500``, ``true``, ``["compiler"]``) and kept as strings otherwise.

An override replaces every spelling of its field in the file, so an env
``OPTIMIZER__RUNS`` wins over a nested ``[solidity.settings.optimizer]``
table instead of conflicting with it. Optimizer overrides are merged key
by key into the declared optimizer table.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Mapping
from typing import Any

from solcfg.domain.errors import InvalidConfigValue

BUILD_ENV_PREFIX = "SOLCFG_BUILD__"

logger = logging.getLogger(__name__)

# Lowercased env path -> canonical field.
_ENV_FIELDS: dict[tuple[str, ...], str] = {
    ("compilerversion",): "compiler_version",
    ("compiler_version",): "compiler_version",
    ("solidity",): "compiler_version",
    ("solidity", "version"): "compiler_version",
    ("optimizer",): "optimizer",
    ("solidity", "settings", "optimizer"): "optimizer",
    ("sourcespath",): "sources_path",
    ("sources_path",): "sources_path",
    ("paths", "sources"): "sources_path",
    ("plugins",): "plugins",
}

# Canonical field -> the key an override is written under.
_OVERRIDE_KEYS = {
    "compiler_version": "compilerVersion",
    "optimizer": "optimizer",
    "sources_path": "sourcesPath",
    "plugins": "plugins",
}


def env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect ``SOLCFG_BUILD__*`` variables as ``{canonical field: value}``.

    Raises InvalidConfigValue if two variables set the same field to
    different values.
    """
    overrides: dict[str, Any] = {}
    sources: dict[str, str] = {}
    for name in sorted(environ):
        if not name.upper().startswith(BUILD_ENV_PREFIX):
            continue
        path = tuple(part.lower() for part in name[len(BUILD_ENV_PREFIX) :].split("__"))
        value = _parse_value(environ[name])

        field = _ENV_FIELDS.get(path)
        if field is None and _ENV_FIELDS.get(path[:-1]) == "optimizer":
            field, value = "optimizer", {path[-1]: value}
        if field is None:
            logger.debug("Ignoring unrecognized build override: %s", name)
            continue

        if field == "optimizer" and isinstance(value, Mapping):
            current = overrides.get(field, {})
            if not isinstance(current, Mapping):
                _conflict(field, sources[field], name)
            for key, item in value.items():
                if key in current and current[key] != item:
                    _conflict(field, sources[field], name)
            overrides[field] = {**current, **value}
        elif field in overrides and overrides[field] != value:
            _conflict(field, sources[field], name)
        else:
            overrides[field] = value
        sources.setdefault(field, name)
    return overrides


def apply_overrides(build: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *build* with each overridden field replaced."""
    merged = copy.deepcopy(dict(build))
    for field, value in overrides.items():
        declared = _pop_field(merged, field)
        if field == "optimizer" and isinstance(value, Mapping) and isinstance(declared, Mapping):
            value = {**declared, **value}
        merged[_OVERRIDE_KEYS[field]] = value
    return merged


def _pop_field(build: dict[str, Any], field: str) -> Any:
    """Remove every spelling of *field* from *build*; return the first found."""
    found: list[Any] = []
    solidity = build.get("solidity")
    if field == "compiler_version":
        found += [build.pop(key) for key in ("compilerVersion", "compiler_version") if key in build]
        if isinstance(solidity, str):
            found.append(build.pop("solidity"))
        elif isinstance(solidity, dict) and "version" in solidity:
            found.append(solidity.pop("version"))
    elif field == "optimizer":
        if "optimizer" in build:
            found.append(build.pop("optimizer"))
        settings = solidity.get("settings") if isinstance(solidity, dict) else None
        if isinstance(settings, dict) and "optimizer" in settings:
            found.append(settings.pop("optimizer"))
    elif field == "sources_path":
        found += [build.pop(key) for key in ("sourcesPath", "sources_path") if key in build]
        paths = build.get("paths")
        if isinstance(paths, dict) and "sources" in paths:
            found.append(paths.pop("sources"))
    elif "plugins" in build:
        found.append(build.pop("plugins"))
    return found[0] if found else None


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError:
        return raw


def _conflict(field: str, first: str, second: str) -> None:
    msg = f"Conflicting environment overrides for {field}: {first} and {second}"
    raise InvalidConfigValue(msg, field=field, keys=[first, second])
