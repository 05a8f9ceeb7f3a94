"""Pluggy hook specifications for solcfg capability extensions.

A plugin implements ``activate`` to register what it adds to the build
pipeline. Activation is not broadcast: the plugin manager calls each
plugin's hook individually, in the planned order.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from solcfg.config.models import BuildConfig
    from solcfg.plugins.context import ActivationContext

PROJECT_NAME = "solcfg"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class SolcfgHookSpec:
    """Hook specifications for the solcfg plugin system."""

    @hookspec
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        """Activate the plugin against a resolved config.

        Use ``context.require()`` for capabilities registered by earlier
        plugins and ``context.provide()`` to register new ones.
        """
