"""Shared pytest fixtures and test helpers for solcfg tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from solcfg.config.discovery import CONFIG_FILENAME
from solcfg.config.settings import SolcfgSettings
from solcfg.infrastructure.project import Project
from solcfg.services.resolver import ConfigResolver

BUILTIN_PLUGINS = ("compiler", "upgrades", "docgen")

SAMPLE_CONFIG = """\
plugins = ["compiler", "upgrades", "docgen"]

[solidity]
version = "0.8.9"

[solidity.settings.optimizer]
enabled = true
runs = 200

[paths]
sources = "./contracts"
"""


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's SOLCFG_* environment out of the tests."""
    for name in ("SOLCFG_CONFIG", "SOLCFG_QUIET", "SOLCFG_VERBOSE", "SOLCFG_JSON_OUTPUT"):
        monkeypatch.delenv(name, raising=False)
    for name in list(os.environ):
        if name.upper().startswith("SOLCFG_BUILD"):
            monkeypatch.delenv(name)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects on the root logger."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    solcfg_logger = logging.getLogger("solcfg")
    solcfg_level = solcfg_logger.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    solcfg_logger.setLevel(solcfg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory with an empty ``contracts/`` folder."""
    (tmp_path / "contracts").mkdir()
    return tmp_path


@pytest.fixture
def resolver(project_root: Path) -> ConfigResolver:
    """Resolver rooted at the temp project that knows the built-in plugins."""
    return ConfigResolver(project_root, known_plugins=BUILTIN_PLUGINS)


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project root so the CLI discovers it.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def write_config(root: Path, text: str = SAMPLE_CONFIG) -> Path:
    """Write ``solcfg.toml`` under *root* and return its path."""
    path = root / CONFIG_FILENAME
    path.write_text(text, encoding="utf-8")
    return path


def make_project(root: Path, text: str | None = SAMPLE_CONFIG) -> Project:
    """Build a Project for *root*, writing *text* as its config first."""
    if text is not None:
        write_config(root, text)
    return Project(SolcfgSettings.from_cli(project_root=root))
