"""Command: activate plugins in declaration order."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from solcfg.commands._base import SolcfgCommand

if TYPE_CHECKING:
    from solcfg.commands._context import AppContext


@click.command(
    cls=SolcfgCommand,
    examples="""\
  solcfg activate
  solcfg -v activate
  solcfg --json activate""",
)
@click.pass_obj
def activate(app: AppContext) -> None:
    """Resolve the config and run every plugin's activation hook in order."""
    from solcfg.services.build import BuildService

    app.emit(BuildService(app.project).activate())
