"""BuildService: resolve, plan, and activate a project's build config.

Every operation starts from the raw declarations and resolves them anew.
Resolution is deterministic, so repeated calls agree. Resolution and
planning errors abort the operation before any plugin runs; every
ResolutionError is reported as a failed ServiceResult.
"""

from __future__ import annotations

import logging

from solcfg.config.models import BuildConfig
from solcfg.domain.errors import ResolutionError
from solcfg.services.base import BaseService
from solcfg.services.result import ServiceResult

logger = logging.getLogger(__name__)


class BuildService(BaseService):
    """Service-layer entry points for the CLI."""

    def resolve(self) -> ServiceResult:
        """Resolve the project's declarations into a BuildConfig."""
        op = "resolve"
        try:
            config = self._project.resolver().resolve(self._project.declarations)
        except ResolutionError as exc:
            logger.debug("Resolution failed: %s", exc.code)
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data=config.summary(),
            warnings=self._sources_warnings(config),
        )

    def plan(self) -> ServiceResult:
        """Resolve, then compute the plugin activation order."""
        op = "plan"
        resolver = self._project.resolver()
        try:
            config = resolver.resolve(self._project.declarations)
            plan = resolver.plan_plugin_activation(config)
        except ResolutionError as exc:
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={"plan": list(plan), "known_plugins": sorted(resolver.known_plugins)},
        )

    def activate(self) -> ServiceResult:
        """Resolve, plan, then run each plugin's activation hook in order."""
        op = "activate"
        resolver = self._project.resolver()
        try:
            config = resolver.resolve(self._project.declarations)
            plan = resolver.plan_plugin_activation(config)
            context = self._project.plugins.activate(plan, config)
        except ResolutionError as exc:
            logger.warning("Activation aborted: %s", exc.message)
            return ServiceResult.failure(op, exc)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "compiler_version": config.compiler_version,
                "activated": list(context.activated),
                "capabilities": dict(context.capabilities),
            },
            warnings=self._sources_warnings(config),
        )

    def _sources_warnings(self, config: BuildConfig) -> list[str]:
        if self._project.filesystem.exists(config.sources_path):
            return []
        return [f"Sources directory does not exist: {config.sources_path}"]
