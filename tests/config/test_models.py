"""Tests for build config models: defaults, immutability, summary view."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from solcfg.config.models import BuildConfig, OptimizerSettings, ValueSource


class TestOptimizerSettings:
    def test_defaults(self) -> None:
        opt = OptimizerSettings()
        assert opt.enabled is False
        assert opt.runs == 200

    def test_frozen(self) -> None:
        opt = OptimizerSettings(enabled=True)
        with pytest.raises(ValidationError):
            opt.enabled = False  # type: ignore[misc]


class TestBuildConfig:
    def _config(self) -> BuildConfig:
        return BuildConfig(
            compiler_version="0.8.9",
            optimizer=OptimizerSettings(enabled=True, runs=300),
            sources_path=Path("/proj/contracts"),
            plugins=("compiler", "docgen"),
            project_root=Path("/proj"),
            provenance={
                "compiler_version": ValueSource.DECLARED,
                "optimizer.runs": ValueSource.DEFAULT,
            },
        )

    def test_summary_is_json_friendly(self) -> None:
        summary = self._config().summary()
        assert summary == {
            "compiler_version": "0.8.9",
            "optimizer": {"enabled": True, "runs": 300},
            "sources_path": "/proj/contracts",
            "plugins": ["compiler", "docgen"],
            "project_root": "/proj",
            "provenance": {"compiler_version": "declared", "optimizer.runs": "default"},
        }

    def test_equality_is_field_wise(self) -> None:
        assert self._config() == self._config()

    def test_json_round_trip(self) -> None:
        cfg = self._config()
        restored = BuildConfig.model_validate_json(cfg.model_dump_json())
        assert restored == cfg

    def test_provenance_is_read_only(self) -> None:
        source = {"compiler_version": ValueSource.DECLARED}
        cfg = BuildConfig(
            compiler_version="0.8.9",
            sources_path=Path("/proj/contracts"),
            project_root=Path("/proj"),
            provenance=source,
        )
        with pytest.raises(TypeError):
            cfg.provenance["compiler_version"] = ValueSource.DEFAULT  # type: ignore[index]
        source["compiler_version"] = ValueSource.DEFAULT
        assert cfg.provenance["compiler_version"] == ValueSource.DECLARED
