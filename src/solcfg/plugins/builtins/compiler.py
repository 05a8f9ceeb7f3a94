"""Built-in compiler plugin.

Registers the ``artifacts`` capability that downstream plugins consume.
The solc invocation itself belongs to the external toolchain.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from solcfg.plugins.hookspecs import hookimpl

if TYPE_CHECKING:
    from solcfg.config.models import BuildConfig
    from solcfg.plugins.context import ActivationContext

logger = logging.getLogger(__name__)

ARTIFACTS = "artifacts"


class CompilerPlugin:
    """Compiler toolchain integration."""

    name = "compiler"

    @hookimpl
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        context.provide(ARTIFACTS)
        logger.debug(
            "Compiler registered: solc %s (optimizer %s, runs=%d)",
            config.compiler_version,
            "on" if config.optimizer.enabled else "off",
            config.optimizer.runs,
        )
