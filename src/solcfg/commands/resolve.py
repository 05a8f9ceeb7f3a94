"""Command: resolve and print the build configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from solcfg.commands._base import SolcfgCommand

if TYPE_CHECKING:
    from solcfg.commands._context import AppContext


@click.command(
    cls=SolcfgCommand,
    examples="""\
  solcfg resolve
  solcfg --json resolve
  solcfg -C path/to/project resolve""",
)
@click.pass_obj
def resolve(app: AppContext) -> None:
    """Validate the config and show resolved values with their provenance."""
    from solcfg.services.build import BuildService

    app.emit(BuildService(app.project).resolve())
