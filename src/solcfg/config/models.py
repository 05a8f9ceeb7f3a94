"""Pydantic models for a resolved build configuration.

Models are frozen: a BuildConfig is validated once per invocation and
never mutated afterwards. Defaults live here; ``solcfg.toml`` only carries
overrides.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator

DEFAULT_OPTIMIZER_RUNS = 200
DEFAULT_SOURCES_DIR = "contracts"


class ValueSource(StrEnum):
    """Where a resolved field's value came from."""

    DECLARED = "declared"
    DEFAULT = "default"


class OptimizerSettings(BaseModel):
    """Compiler optimizer tuning: on/off plus the expected run count."""

    model_config = {"frozen": True}

    enabled: bool = False
    runs: int = DEFAULT_OPTIMIZER_RUNS


class BuildConfig(BaseModel):
    """The resolved, immutable configuration for one build invocation.

    Attributes:
        compiler_version: Exact ``major.minor.patch`` compiler release.
        optimizer: Optimizer settings with defaults applied.
        sources_path: Absolute, normalized directory of source units.
        plugins: Plugin identifiers in declaration order.
        project_root: Absolute base directory for relative paths.
        provenance: Read-only ``field -> ValueSource`` for every resolved field.
    """

    model_config = {"frozen": True}

    compiler_version: str
    optimizer: OptimizerSettings = Field(default_factory=OptimizerSettings)
    sources_path: Path
    plugins: tuple[str, ...] = ()
    project_root: Path
    provenance: Mapping[str, ValueSource] = Field(default_factory=dict)

    @field_validator("provenance", mode="after")
    @classmethod
    def _freeze_provenance(cls, value: Mapping[str, ValueSource]) -> Mapping[str, ValueSource]:
        return MappingProxyType(dict(value))

    @field_serializer("provenance")
    def _serialize_provenance(self, value: Mapping[str, ValueSource]) -> dict[str, str]:
        return {key: str(source) for key, source in value.items()}

    def summary(self) -> dict[str, Any]:
        """Flat, JSON-friendly view used by the service layer."""
        return {
            "compiler_version": self.compiler_version,
            "optimizer": {"enabled": self.optimizer.enabled, "runs": self.optimizer.runs},
            "sources_path": str(self.sources_path),
            "plugins": list(self.plugins),
            "project_root": str(self.project_root),
            "provenance": {key: str(source) for key, source in self.provenance.items()},
        }
