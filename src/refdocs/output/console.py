"""Rich Console factory and theme for refdocs output.

Consoles render to a StringIO buffer so renderers return strings and the
CLI decides where they go. In non-TTY environments (tests, pipes) Rich
disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

REFDOCS_THEME = Theme(
    {
        "rd.ok": "bold green",
        "rd.error": "bold red",
        "rd.warning": "bold yellow",
        "rd.op": "bold cyan",
        "rd.key": "dim",
        "rd.uri": "bold blue",
        "rd.path": "dim",
        "rd.title": "bold",
        "rd.valid": "green",
        "rd.broken": "red",
        "rd.status.experimental": "magenta",
        "rd.status.in-development": "yellow",
        "rd.status.planned": "cyan",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=REFDOCS_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str | None) -> str:
    """Rich style for a roadmap status, or "" when unknown."""
    return f"rd.status.{status}" if status in ("experimental", "in-development", "planned") else ""
