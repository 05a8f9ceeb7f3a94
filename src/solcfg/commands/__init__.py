"""Subcommand modules for solcfg.

Provides register_commands() which uses deferred imports to keep
``solcfg --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from solcfg.commands.activate import activate
    from solcfg.commands.init_cmd import init_cmd
    from solcfg.commands.plan import plan
    from solcfg.commands.resolve import resolve

    cli.add_command(init_cmd)
    cli.add_command(resolve)
    cli.add_command(plan)
    cli.add_command(activate)
