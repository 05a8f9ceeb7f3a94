"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the Project lazily and centralizes result
emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from solcfg.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from solcfg.config.settings import SolcfgSettings
    from solcfg.infrastructure.project import Project
    from solcfg.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The project is created on first use, so ``--help`` and ``--version``
    never trigger plugin discovery.
    """

    def __init__(self, settings: SolcfgSettings) -> None:
        self.settings = settings
        self._project: Project | None = None

        from solcfg.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def project(self) -> Project:
        """The project instance (created lazily on first access)."""
        if self._project is None:
            from solcfg.infrastructure.project import Project

            self._project = Project(self.settings)
        return self._project

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout. Warnings go to stderr so they don't
          pollute piped output.
        * Failure: writes to stderr and exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
