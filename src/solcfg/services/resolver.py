"""ConfigResolver: raw declarations in, validated BuildConfig out.

Resolution is a single deterministic pass:
parse -> validate -> default-fill -> normalize path -> return.

INVARIANT: An explicit value always wins over a default.
INVARIANT: Plugin order is preserved verbatim. Never reordered, never
deduplicated. Later plugins may consume state registered by earlier ones.
INVARIANT: No partial BuildConfig is ever returned; every failure raises
a :class:`~solcfg.domain.errors.ResolutionError` subclass.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from pathlib import Path, PurePath
from typing import Any

from solcfg.config.models import (
    DEFAULT_OPTIMIZER_RUNS,
    DEFAULT_SOURCES_DIR,
    BuildConfig,
    OptimizerSettings,
    ValueSource,
)
from solcfg.domain.errors import (
    InvalidConfigValue,
    InvalidOptimizerSettings,
    InvalidVersionFormat,
    PathEscapesRoot,
    UnknownPlugin,
)
from solcfg.domain.versions import parse_version
from solcfg.infrastructure.filesystem import Filesystem, LocalFilesystem, is_within

logger = logging.getLogger(__name__)

_MISSING: Any = object()

# Top-level keys understood by the resolver, in every accepted spelling.
_KNOWN_KEYS = frozenset(
    {
        "compilerVersion",
        "compiler_version",
        "optimizer",
        "sourcesPath",
        "sources_path",
        "plugins",
        "solidity",
        "paths",
    }
)
_OPTIMIZER_KEYS = frozenset({"enabled", "runs"})


class ConfigResolver:
    """Produce validated BuildConfig values and plugin activation plans.

    The resolver only sequences plugins; running their activation hooks
    belongs to :class:`~solcfg.plugins.manager.PluginManager`.

    Usage::

        resolver = ConfigResolver(root, known_plugins=["compiler", "docgen"])
        config = resolver.resolve({"compilerVersion": "0.8.9"})
        plan = resolver.plan_plugin_activation(config)
    """

    def __init__(
        self,
        project_root: str | Path,
        known_plugins: Iterable[str] = (),
        filesystem: Filesystem | None = None,
    ) -> None:
        self._fs: Filesystem = filesystem or LocalFilesystem()
        self._root = self._fs.normalize(project_root)
        self._known_plugins = frozenset(known_plugins)

    @property
    def project_root(self) -> Path:
        return self._root

    @property
    def known_plugins(self) -> frozenset[str]:
        return self._known_plugins

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def resolve(self, raw: Mapping[str, Any]) -> BuildConfig:
        """Validate *raw* declarations and return a fully populated BuildConfig."""
        if not isinstance(raw, Mapping):
            msg = f"Build configuration must be a mapping, got {type(raw).__name__}"
            raise InvalidConfigValue(msg, field="<root>")

        declared = _collect_declarations(raw, source_key=self._source_key)
        provenance: dict[str, ValueSource] = {}

        version = self._resolve_version(declared["compiler_version"])
        provenance["compiler_version"] = ValueSource.DECLARED
        optimizer = self._resolve_optimizer(declared["optimizer"], provenance)
        sources_path = self._resolve_sources_path(declared["sources_path"], provenance)
        plugins = self._resolve_plugins(declared["plugins"], provenance)

        config = BuildConfig(
            compiler_version=version,
            optimizer=optimizer,
            sources_path=sources_path,
            plugins=plugins,
            project_root=self._root,
            provenance=provenance,
        )
        logger.debug(
            "Resolved build config: solc %s, optimizer=%s/%d, sources=%s, plugins=%s",
            config.compiler_version,
            config.optimizer.enabled,
            config.optimizer.runs,
            config.sources_path,
            ",".join(config.plugins) or "-",
        )
        return config

    def plan_plugin_activation(self, config: BuildConfig) -> tuple[str, ...]:
        """Return the activation order for *config*: exactly its declared order.

        Raises UnknownPlugin for the first identifier missing from the
        registered set.
        """
        for name in config.plugins:
            if name not in self._known_plugins:
                msg = f"Unknown plugin: {name!r}"
                raise UnknownPlugin(msg, plugin=name, known=sorted(self._known_plugins))
        return config.plugins

    # ------------------------------------------------------------------
    # Field resolution
    # ------------------------------------------------------------------

    @staticmethod
    def _resolve_version(value: Any) -> str:
        if value is _MISSING:
            raise InvalidVersionFormat("Compiler version is required", value=None)
        if not isinstance(value, str):
            msg = f"Compiler version must be a string, got {type(value).__name__}"
            raise InvalidVersionFormat(msg, value=repr(value))
        try:
            parse_version(value)
        except ValueError as exc:
            msg = f"Invalid compiler version {value!r}: expected major.minor.patch"
            raise InvalidVersionFormat(msg, value=value) from exc
        return value

    @staticmethod
    def _resolve_optimizer(
        value: Any,
        provenance: dict[str, ValueSource],
    ) -> OptimizerSettings:
        if value is _MISSING:
            provenance["optimizer.enabled"] = ValueSource.DEFAULT
            provenance["optimizer.runs"] = ValueSource.DEFAULT
            return OptimizerSettings()
        if not isinstance(value, Mapping):
            msg = f"Optimizer settings must be a mapping, got {type(value).__name__}"
            raise InvalidOptimizerSettings(msg, field="optimizer")

        ignored = sorted(set(value) - _OPTIMIZER_KEYS)
        if ignored:
            logger.debug("Ignoring unrecognized optimizer keys: %s", ", ".join(ignored))

        enabled = value.get("enabled", _MISSING)
        if enabled is _MISSING:
            enabled = False
            provenance["optimizer.enabled"] = ValueSource.DEFAULT
        elif not isinstance(enabled, bool):
            msg = f"optimizer.enabled must be a boolean, got {enabled!r}"
            raise InvalidOptimizerSettings(msg, field="optimizer.enabled", value=repr(enabled))
        else:
            provenance["optimizer.enabled"] = ValueSource.DECLARED

        # Validated even when disabled so a later toggle cannot expose a bad value.
        runs = value.get("runs", _MISSING)
        if runs is _MISSING:
            runs = DEFAULT_OPTIMIZER_RUNS
            provenance["optimizer.runs"] = ValueSource.DEFAULT
        elif isinstance(runs, bool) or not isinstance(runs, int):
            msg = f"optimizer.runs must be an integer, got {runs!r}"
            raise InvalidOptimizerSettings(msg, field="optimizer.runs", value=repr(runs))
        elif runs <= 0:
            msg = f"optimizer.runs must be positive, got {runs}"
            raise InvalidOptimizerSettings(msg, field="optimizer.runs", value=runs)
        else:
            provenance["optimizer.runs"] = ValueSource.DECLARED

        return OptimizerSettings(enabled=enabled, runs=runs)

    def _resolve_sources_path(
        self,
        value: Any,
        provenance: dict[str, ValueSource],
    ) -> Path:
        if value is _MISSING:
            provenance["sources_path"] = ValueSource.DEFAULT
            return self._fs.normalize(self._root / DEFAULT_SOURCES_DIR)
        if isinstance(value, PurePath):
            value = str(value)
        if not isinstance(value, str):
            msg = f"Sources path must be a string, got {type(value).__name__}"
            raise InvalidConfigValue(msg, field="sources_path", value=repr(value))
        if not value.strip():
            raise InvalidConfigValue("Sources path must not be empty", field="sources_path")

        # Absolute declarations stay as-is; relative ones hang off the root.
        normalized = self._fs.normalize(self._root / value)
        if not is_within(normalized, self._root):
            msg = f"Sources path escapes project root: {value!r} -> {normalized}"
            raise PathEscapesRoot(msg, path=str(normalized), root=str(self._root))

        provenance["sources_path"] = ValueSource.DECLARED
        return normalized

    def _source_key(self, value: Any) -> Any:
        """Normalized location of a declared sources path, for conflict checks."""
        if isinstance(value, (str, PurePath)) and str(value).strip():
            return self._fs.normalize(self._root / value)
        return value

    @staticmethod
    def _resolve_plugins(
        value: Any,
        provenance: dict[str, ValueSource],
    ) -> tuple[str, ...]:
        if value is _MISSING:
            provenance["plugins"] = ValueSource.DEFAULT
            return ()
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            msg = f"Plugins must be a list of identifiers, got {type(value).__name__}"
            raise InvalidConfigValue(msg, field="plugins", value=repr(value))
        for index, name in enumerate(value):
            if not isinstance(name, str) or not name.strip():
                msg = f"Plugin identifier at position {index} must be a non-empty string"
                raise InvalidConfigValue(msg, field="plugins", index=index, value=repr(name))
        provenance["plugins"] = ValueSource.DECLARED
        return tuple(value)


# ---------------------------------------------------------------------------
# Layout normalization
# ---------------------------------------------------------------------------


def _collect_declarations(
    raw: Mapping[str, Any],
    source_key: Callable[[Any], Any] | None = None,
) -> dict[str, Any]:
    """Fold every accepted spelling of each field into one canonical key.

    Accepts camelCase (``compilerVersion``), snake_case
    (``compiler_version``), and the toolchain's nested layout
    (``solidity.version``, ``solidity.settings.optimizer``,
    ``paths.sources``). Missing fields map to ``_MISSING``. Source path
    spellings are compared through *source_key* when given.
    """
    ignored = sorted(str(key) for key in raw if key not in _KNOWN_KEYS)
    if ignored:
        logger.debug("Ignoring unrecognized config keys: %s", ", ".join(ignored))

    nested_version: Any = _MISSING
    nested_optimizer: Any = _MISSING
    solidity = raw.get("solidity", _MISSING)
    if isinstance(solidity, str):
        nested_version = solidity
    elif isinstance(solidity, Mapping):
        nested_version = solidity.get("version", _MISSING)
        settings = solidity.get("settings", _MISSING)
        if isinstance(settings, Mapping):
            nested_optimizer = settings.get("optimizer", _MISSING)
        elif settings is not _MISSING:
            msg = "solidity.settings must be a mapping"
            raise InvalidConfigValue(msg, field="solidity.settings", value=repr(settings))
    elif solidity is not _MISSING:
        msg = "solidity must be a version string or a mapping"
        raise InvalidConfigValue(msg, field="solidity", value=repr(solidity))

    nested_sources: Any = _MISSING
    paths = raw.get("paths", _MISSING)
    if isinstance(paths, Mapping):
        nested_sources = paths.get("sources", _MISSING)
    elif paths is not _MISSING:
        raise InvalidConfigValue("paths must be a mapping", field="paths", value=repr(paths))

    return {
        "compiler_version": _pick(
            "compiler_version",
            ("compilerVersion", raw.get("compilerVersion", _MISSING)),
            ("compiler_version", raw.get("compiler_version", _MISSING)),
            ("solidity.version", nested_version),
        ),
        "optimizer": _pick(
            "optimizer",
            ("optimizer", raw.get("optimizer", _MISSING)),
            ("solidity.settings.optimizer", nested_optimizer),
        ),
        "sources_path": _pick(
            "sources_path",
            ("sourcesPath", raw.get("sourcesPath", _MISSING)),
            ("sources_path", raw.get("sources_path", _MISSING)),
            ("paths.sources", nested_sources),
            key=source_key,
        ),
        "plugins": raw.get("plugins", _MISSING),
    }


def _pick(
    field: str,
    *candidates: tuple[str, Any],
    key: Callable[[Any], Any] | None = None,
) -> Any:
    """Return the first declared value among *candidates*, or ``_MISSING``.

    Raises InvalidConfigValue if two spellings declare different values.
    Values are compared by type and value, or through *key* when given.
    """
    identity = key or (lambda value: (type(value), value))
    declared = [(label, value) for label, value in candidates if value is not _MISSING]
    if not declared:
        return _MISSING
    first_label, first_value = declared[0]
    for label, value in declared[1:]:
        if identity(value) != identity(first_value):
            msg = f"Conflicting values for {field}: {first_label!r} and {label!r}"
            raise InvalidConfigValue(msg, field=field, keys=[first_label, label])
    return first_value
