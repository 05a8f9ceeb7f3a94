"""Root CLI group for solcfg with global flags and command registration."""

from __future__ import annotations

from pathlib import Path

import click

from solcfg import __version__
from solcfg.commands import register_commands
from solcfg.commands._context import AppContext
from solcfg.config.settings import SolcfgSettings
from solcfg.domain.errors import ResolutionError


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="solcfg")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-C",
    "--root",
    "project_root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project root (defaults to the config file's directory).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    project_root: Path | None,
) -> None:
    """solcfg: Solidity build configuration resolver."""
    ctx.ensure_object(dict)
    # Unset flags defer to env vars and the [solcfg] table.
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    try:
        settings = SolcfgSettings.from_cli(
            config_path=config_path,
            project_root=project_root,
            **{name: True for name, value in flags.items() if value},
        )
    except ResolutionError as exc:
        raise click.ClickException(exc.message) from exc
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
