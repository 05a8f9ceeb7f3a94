"""Project: per-invocation wiring of settings, filesystem, and plugins.

Services receive a Project at construction time. The plugin registry is
created lazily so ``--help`` and ``init`` never trigger entry-point
discovery.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from solcfg.infrastructure.filesystem import Filesystem, LocalFilesystem

if TYPE_CHECKING:
    from solcfg.config.settings import SolcfgSettings
    from solcfg.plugins.manager import PluginManager
    from solcfg.services.resolver import ConfigResolver

logger = logging.getLogger(__name__)


class Project:
    """A build project rooted at ``settings.project_root``."""

    def __init__(
        self,
        settings: SolcfgSettings,
        *,
        filesystem: Filesystem | None = None,
        plugins: PluginManager | None = None,
    ) -> None:
        self.settings = settings
        self.filesystem: Filesystem = filesystem or LocalFilesystem()
        self.root: Path = self.filesystem.normalize(settings.project_root)
        self._plugins = plugins

    @property
    def plugins(self) -> PluginManager:
        """The plugin registry (discovered lazily on first access)."""
        if self._plugins is None:
            from solcfg.plugins.manager import PluginManager

            self._plugins = PluginManager()
        if not self._plugins.is_loaded:
            names = self._plugins.discover_and_load()
            logger.debug("Plugins available: %s", ", ".join(names))
        return self._plugins

    @property
    def declarations(self) -> dict[str, Any]:
        """Raw build declarations from the config file and environment."""
        return dict(self.settings.build)

    def resolver(self) -> ConfigResolver:
        """A resolver bound to this project's root and registered plugins."""
        from solcfg.services.resolver import ConfigResolver

        return ConfigResolver(
            self.root,
            known_plugins=self.plugins.list_plugin_names(),
            filesystem=self.filesystem,
        )
