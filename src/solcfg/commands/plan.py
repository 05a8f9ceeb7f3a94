"""Command: show the plugin activation plan."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from solcfg.commands._base import SolcfgCommand

if TYPE_CHECKING:
    from solcfg.commands._context import AppContext


@click.command(
    cls=SolcfgCommand,
    examples="""\
  solcfg plan
  solcfg --json plan""",
)
@click.pass_obj
def plan(app: AppContext) -> None:
    """Show the order in which plugins will be activated."""
    from solcfg.services.build import BuildService

    app.emit(BuildService(app.project).plan())
