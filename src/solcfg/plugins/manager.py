"""Plugin registry and sequential activation.

Discovery: built-in plugins are registered explicitly, then pip-installed
plugins are loaded from the ``solcfg.plugins`` entry-point group.
Activation: each planned plugin's ``activate`` hook runs exactly once, in
plan order, on the calling thread.

INVARIANT: Discovery failures are warnings. Activation failures abort the
build with PluginActivationError.
"""

from __future__ import annotations

import importlib.metadata
import inspect
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

import pluggy

from solcfg.domain.errors import PluginActivationError, UnknownPlugin
from solcfg.plugins.context import ActivationContext
from solcfg.plugins.hookspecs import PROJECT_NAME, SolcfgHookSpec

if TYPE_CHECKING:
    from solcfg.config.models import BuildConfig

ENTRY_POINT_GROUP = "solcfg.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, registration, and ordered activation."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SolcfgHookSpec)
        self._loaded: bool = False

    def discover_and_load(self, *, entry_points: bool = True) -> list[str]:
        """Register the built-ins, then load entry-point plugins.

        Entry points whose name is already taken are skipped, and one that
        fails to import or register is logged and skipped. Returns the names of all registered plugins.
        """
        from solcfg.plugins.builtins import builtin_plugins

        for name, plugin in builtin_plugins():
            if self._pm.get_plugin(name) is None:
                self.register_plugin(plugin, name=name)

        if entry_points:
            self._load_entry_points()
            self._normalize_plugin_instances()
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance under *name* (defaults to its class name)."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def unregister(self, plugin: object) -> None:
        """Unregister a plugin instance."""
        self._pm.unregister(plugin)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    @property
    def hook(self) -> pluggy.HookRelay:
        """Access the hook relay."""
        return self._pm.hook

    def get_plugin(self, name: str) -> object | None:
        """Return the plugin registered under *name*, if any."""
        return self._pm.get_plugin(name)

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._pm.get_name(p) or p.__class__.__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Activation
    # ------------------------------------------------------------------

    def activate(self, plan: Sequence[str], config: BuildConfig) -> ActivationContext:
        """Run the ``activate`` hook of each plugin in *plan*, strictly in order.

        The hook relay broadcasts in registration-LIFO order, so each
        plugin's own hookimpls are called one plugin at a time. A hookimpl
        receives only the hookspec arguments it declares.
        """
        context = ActivationContext()
        hookimpls = self._pm.hook.activate.get_hookimpls()
        for name in plan:
            plugin = self._pm.get_plugin(name)
            if plugin is None:
                msg = f"Unknown plugin: {name!r}"
                raise UnknownPlugin(msg, plugin=name, known=sorted(self.list_plugin_names()))

            impls = [impl for impl in hookimpls if impl.plugin is plugin]
            if not impls:
                logger.debug("Plugin %s has no activate hook", name)
            hook_args = {"config": config, "context": context}
            context.current = name
            try:
                for impl in impls:
                    impl.function(**{arg: hook_args[arg] for arg in impl.argnames})
            except PluginActivationError:
                raise
            except Exception as exc:
                msg = f"Plugin {name!r} failed to activate: {exc}"
                raise PluginActivationError(msg, plugin=name) from exc
            finally:
                context.current = None

            context.activated.append(name)
            logger.debug("Activated plugin: %s", name)
        return context

    # ------------------------------------------------------------------
    # Entry-point loading
    # ------------------------------------------------------------------

    def _load_entry_points(self) -> None:
        """Load and register each ``solcfg.plugins`` entry point independently."""
        for ep in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if self._pm.get_plugin(ep.name) is not None or self._pm.is_blocked(ep.name):
                continue
            try:
                plugin = ep.load()
                self._pm.register(plugin, name=ep.name)
            except Exception:
                logger.warning("Failed to load entry-point plugin %s", ep.name, exc_info=True)
                continue
            logger.debug("Loaded entry-point plugin: %s", ep.name)

    # ------------------------------------------------------------------
    # Entry-point normalization
    # ------------------------------------------------------------------

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly. Calling
        hooks on a class object leaves ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            if not self._has_hook_impls(plugin):
                continue

            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)

            try:
                instance = plugin()
            except Exception:
                logger.warning(
                    "Failed to instantiate entry-point plugin %s",
                    plugin_name,
                    exc_info=True,
                )
                continue

            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Check whether *cls* has any methods decorated with ``@hookimpl``."""
        for name in dir(cls):
            if name.startswith("_"):
                continue
            if _is_hookimpl(getattr(cls, name, None)):
                return True
        return False


def _is_hookimpl(obj: object) -> bool:
    """``HookimplMarker("solcfg")`` sets a ``solcfg_impl`` attribute."""
    return callable(obj) and getattr(obj, f"{PROJECT_NAME}_impl", None) is not None
