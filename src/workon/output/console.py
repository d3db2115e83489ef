"""Rich Console factory and theme for workon output.

Consoles render into a StringIO buffer so that renderers keep the
``format_result() -> str`` contract.  Outside a terminal (tests, pipes)
Rich drops the color codes by itself.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WORKON_THEME = Theme(
    {
        "workon.ok": "bold green",
        "workon.error": "bold red",
        "workon.warning": "bold yellow",
        "workon.op": "bold cyan",
        "workon.key": "dim",
        "workon.identity": "bold blue",
        "workon.path": "dim",
        "workon.rejected": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=WORKON_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
