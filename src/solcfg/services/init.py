"""InitService: write a starter solcfg.toml."""

from __future__ import annotations

import logging

from solcfg.config.discovery import CONFIG_FILENAME
from solcfg.config.models import DEFAULT_OPTIMIZER_RUNS, DEFAULT_SOURCES_DIR
from solcfg.domain.errors import InvalidVersionFormat
from solcfg.domain.versions import parse_version
from solcfg.services.base import BaseService
from solcfg.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)

DEFAULT_COMPILER_VERSION = "0.8.9"
DEFAULT_PLUGINS = ("compiler", "upgrades", "docgen")

_TEMPLATE = """\
# solcfg build configuration
plugins = [{plugins}]

[solidity]
version = "{version}"

[solidity.settings.optimizer]
enabled = {enabled}
runs = {runs}

[paths]
sources = "{sources}"
"""


def render_config(
    *,
    version: str = DEFAULT_COMPILER_VERSION,
    optimizer: bool = True,
    runs: int = DEFAULT_OPTIMIZER_RUNS,
    sources: str = DEFAULT_SOURCES_DIR,
    plugins: tuple[str, ...] = DEFAULT_PLUGINS,
) -> str:
    """Render the starter config as TOML text."""
    return _TEMPLATE.format(
        plugins=", ".join(f'"{name}"' for name in plugins),
        version=version,
        enabled="true" if optimizer else "false",
        runs=runs,
        sources=sources,
    )


class InitService(BaseService):
    def init(self, *, version: str = DEFAULT_COMPILER_VERSION, force: bool = False) -> ServiceResult:
        """Write ``solcfg.toml`` into the project root.

        Refuses to overwrite an existing file unless *force* is set.
        """
        op = "init"
        try:
            parse_version(version)
        except ValueError:
            msg = f"Invalid compiler version {version!r}: expected major.minor.patch"
            return ServiceResult.failure(op, InvalidVersionFormat(msg, value=version))

        target = self._project.root / CONFIG_FILENAME
        if target.exists() and not force:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="CONFIG_EXISTS",
                    message=f"{CONFIG_FILENAME} already exists (use --force to overwrite)",
                    detail={"path": str(target)},
                ),
            )

        target.write_text(render_config(version=version), encoding="utf-8")
        logger.debug("Wrote %s", target)
        return ServiceResult(ok=True, op=op, data={"path": str(target)})
