"""Built-in capability plugins: compiler, upgrade-safety, and docs.

Each built-in carries only the contract its name implies. The actual
compiler, upgrade analysis, and doc rendering stay external.
"""

from __future__ import annotations

from solcfg.plugins.builtins.compiler import CompilerPlugin
from solcfg.plugins.builtins.docgen import DocgenPlugin
from solcfg.plugins.builtins.upgrades import UpgradesPlugin


def builtin_plugins() -> list[tuple[str, object]]:
    """Fresh ``(name, instance)`` pairs for every built-in plugin."""
    return [
        (CompilerPlugin.name, CompilerPlugin()),
        (UpgradesPlugin.name, UpgradesPlugin()),
        (DocgenPlugin.name, DocgenPlugin()),
    ]


__all__ = ["CompilerPlugin", "DocgenPlugin", "UpgradesPlugin", "builtin_plugins"]
