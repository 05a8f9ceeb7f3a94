"""Rich/JSON output helpers.

The CLI renders ServiceResult for humans (Rich text) or machines
(``--json``). Human output marks values that were filled from defaults
so provenance stays visible without JSON.
"""

from __future__ import annotations

import json as _json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.markup import escape

from solcfg.output.console import create_console, get_output

if TYPE_CHECKING:
    from solcfg.services.result import ServiceResult


@dataclass(frozen=True)
class OutputSettings:
    """Rendering switches derived from the global CLI flags."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def _render_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return escape(_json.dumps(value, separators=(",", ":")))
    return escape(str(value))


def _format_data_human(data: dict[str, Any]) -> list[str]:
    """Format result data as indented key-value lines (Rich markup)."""
    provenance = data.get("provenance", {})
    lines: list[str] = []
    for key, value in data.items():
        if key == "provenance":
            continue
        if key == "optimizer" and isinstance(value, dict):
            for sub_key, sub_value in value.items():
                tag = provenance.get(f"optimizer.{sub_key}")
                lines.append(_line(f"optimizer.{sub_key}", sub_value, tag))
            continue
        lines.append(_line(key, value, provenance.get(key)))
    return lines


def _line(key: str, value: Any, source: str | None) -> str:
    suffix = " [solcfg.default](default)[/]" if source == "default" else ""
    return f"  [solcfg.key]{escape(key)}:[/] {_render_value(value)}{suffix}"


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        console.print(f"[solcfg.ok]OK:[/] [solcfg.op]{result.op}[/]")
        if result.data and not settings.quiet:
            for line in _format_data_human(result.data):
                console.print(line)
        return get_output(console).rstrip("\n")

    error = result.error
    message = error.message if error else "Unknown error"
    code = f" [{error.code}]" if error else ""
    console.print(
        f"[solcfg.error]ERROR:[/] [solcfg.op]{result.op}[/] - {escape(message)}{escape(code)}"
    )
    if settings.verbose and error and error.detail:
        for line in _format_data_human(error.detail):
            console.print(line)
    return get_output(console).rstrip("\n")
