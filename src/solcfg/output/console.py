"""Rich Console factory and theme for solcfg output.

Consoles render to a StringIO buffer so formatters keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich
disables color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SOLCFG_THEME = Theme(
    {
        "solcfg.ok": "bold green",
        "solcfg.error": "bold red",
        "solcfg.warning": "bold yellow",
        "solcfg.op": "bold cyan",
        "solcfg.key": "dim",
        "solcfg.path": "blue",
        "solcfg.plugin": "magenta",
        "solcfg.default": "dim italic",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SOLCFG_THEME,
        no_color=no_color,
        highlight=False,
        soft_wrap=True,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
