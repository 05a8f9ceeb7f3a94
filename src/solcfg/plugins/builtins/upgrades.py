"""Built-in upgrade-safety plugin.

Depends on compiled artifacts, so it must activate after ``compiler``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from solcfg.plugins.builtins.compiler import ARTIFACTS
from solcfg.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from solcfg.config.models import BuildConfig
    from solcfg.plugins.context import ActivationContext

logger = logging.getLogger(__name__)

UPGRADE_SAFETY = "upgrade-safety"


class UpgradesPlugin:
    name = "upgrades"

    @hookimpl
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        provider = context.require(ARTIFACTS)
        context.provide(UPGRADE_SAFETY)
        logger.debug("Upgrade-safety checks attached to %s artifacts", provider)
