"""Command: write a starter solcfg.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from solcfg.commands._base import SolcfgCommand
from solcfg.services.init import DEFAULT_COMPILER_VERSION

if TYPE_CHECKING:
    from solcfg.commands._context import AppContext


@click.command(
    "init",
    cls=SolcfgCommand,
    examples="""\
  solcfg init
  solcfg init --solc 0.8.20
  solcfg init --force""",
)
@click.option(
    "--solc",
    "version",
    default=DEFAULT_COMPILER_VERSION,
    show_default=True,
    help="Compiler version to pin.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing solcfg.toml.")
@click.pass_obj
def init_cmd(app: AppContext, version: str, force: bool) -> None:
    """Create solcfg.toml in the project root."""
    from solcfg.services.init import InitService

    app.emit(InitService(app.project).init(version=version, force=force))
