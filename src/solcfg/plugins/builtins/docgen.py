"""Built-in documentation plugin.

Docs are extracted from compiled sources, so ``artifacts`` must exist.
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

DOCS = "docs"


class DocgenPlugin:
    name = "docgen"

    @hookimpl
    def activate(self, config: BuildConfig, context: ActivationContext) -> None:
        context.require(ARTIFACTS)
        context.provide(DOCS)
        logger.debug("Doc generation registered for %s", config.sources_path)
