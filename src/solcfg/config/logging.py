"""Route solcfg's stdlib loggers through structlog renderers on stderr.

``--log-json`` emits one JSON object per record; otherwise records are
rendered for a terminal. stdout stays reserved for command results.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that stay at WARNING regardless of --verbose.
_QUIET_LOGGERS = ("pluggy",)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install a single stderr handler on the root logger.

    ``solcfg.*`` logs at DEBUG when *verbose*, WARNING otherwise.
    """
    pre_chain: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderers: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if log_json:
        # exc_info becomes an "exception" string field.
        renderers += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(foreign_pre_chain=pre_chain, processors=renderers)
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("solcfg").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
