"""Rich Console factory and theme for nsidctl output.

Consoles render into a StringIO buffer, preserving the
``format_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

NSID_THEME = Theme(
    {
        "nsid.ok": "bold green",
        "nsid.error": "bold red",
        "nsid.warning": "bold yellow",
        "nsid.op": "bold cyan",
        "nsid.key": "dim",
        "nsid.id": "bold blue",
        "nsid.authority": "magenta",
        "nsid.name": "bold",
        "nsid.caret": "bold red",
    }
)

DEFAULT_WIDTH = 100


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps wrapping stable in tests).
    """
    return Console(
        file=StringIO(),
        theme=NSID_THEME,
        no_color=no_color,
        highlight=False,
        width=width or DEFAULT_WIDTH,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
