"""Extension layer: capability plugins via pluggy.

Discovery: built-ins plus entry_points (pip-installed) in ``solcfg.plugins``.
INVARIANT: Plugins activate strictly in declaration order.
"""

from solcfg.plugins.context import ActivationContext
from solcfg.plugins.hookspecs import hookimpl
from solcfg.plugins.manager import PluginManager

__all__ = ["ActivationContext", "PluginManager", "hookimpl"]
