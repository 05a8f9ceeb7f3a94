"""Shared state threaded through one sequential activation run."""

from __future__ import annotations

from dataclasses import dataclass, field

from solcfg.domain.errors import PluginActivationError


@dataclass
class ActivationContext:
    """Records which plugins ran and which capabilities they registered.

    Attributes:
        activated: Plugin names in the order their hooks completed.
        capabilities: ``capability -> providing plugin``.
        current: Name of the plugin whose hook is running, if any.
    """

    activated: list[str] = field(default_factory=list)
    capabilities: dict[str, str] = field(default_factory=dict)
    current: str | None = None

    def provide(self, capability: str) -> None:
        """Register *capability* on behalf of the running plugin."""
        provider = self.current or "<unknown>"
        existing = self.capabilities.get(capability)
        if existing is not None and existing != provider:
            msg = f"Capability {capability!r} already provided by plugin {existing!r}"
            raise PluginActivationError(msg, plugin=provider, capability=capability)
        self.capabilities[capability] = provider

    def require(self, capability: str) -> str:
        """Return the plugin that provided *capability*.

        Raises PluginActivationError if no earlier plugin registered it.
        """
        provider = self.capabilities.get(capability)
        if provider is None:
            msg = (
                f"Plugin {self.current!r} requires capability {capability!r}, "
                "which no earlier plugin provides"
            )
            raise PluginActivationError(msg, plugin=self.current, capability=capability)
        return provider
