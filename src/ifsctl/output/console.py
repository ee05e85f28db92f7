"""Rich Console factory and theme for ifsctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

IFS_THEME = Theme(
    {
        "ifs.ok": "bold green",
        "ifs.error": "bold red",
        "ifs.warning": "bold yellow",
        "ifs.op": "bold cyan",
        "ifs.key": "dim",
        "ifs.path": "dim",
        "ifs.name": "bold",
        "ifs.count": "magenta",
        "ifs.cell": "bold blue",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=IFS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
