"""Typed resolution failures.

INVARIANT: Every failure raised while resolving or activating a build
configuration is a :class:`ResolutionError`. The service layer maps the
``code`` attribute onto :class:`~solcfg.services.result.ServiceError`.
"""

from __future__ import annotations

from typing import Any


class ResolutionError(Exception):
    """Base class for all build-configuration failures."""

    code = "RESOLUTION_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail: dict[str, Any] = detail


class InvalidVersionFormat(ResolutionError):
    """Compiler version is missing or not ``major.minor.patch``."""

    code = "INVALID_VERSION_FORMAT"


class InvalidOptimizerSettings(ResolutionError):
    """Optimizer block is malformed or ``runs`` is not a positive integer."""

    code = "INVALID_OPTIMIZER_SETTINGS"


class PathEscapesRoot(ResolutionError):
    """Sources path normalizes to a location outside the project root."""

    code = "PATH_ESCAPES_ROOT"


class UnknownPlugin(ResolutionError):
    """A declared plugin identifier is not in the registered set."""

    code = "UNKNOWN_PLUGIN"


class InvalidConfigValue(ResolutionError):
    """A declared value has the wrong shape or conflicts with another spelling."""

    code = "INVALID_CONFIG_VALUE"


class ConfigFileError(ResolutionError):
    """The configuration file could not be parsed."""

    code = "CONFIG_FILE_ERROR"


class PluginActivationError(ResolutionError):
    """A plugin's activation hook failed or a required capability is missing."""

    code = "PLUGIN_ACTIVATION_FAILED"
