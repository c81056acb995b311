"""Rich Console factory and theme for wingetctl output.

Consoles render into a StringIO buffer so renderers keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich drops
color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

WINGETCTL_THEME = Theme(
    {
        "wg.ok": "bold green",
        "wg.error": "bold red",
        "wg.warning": "bold yellow",
        "wg.op": "bold cyan",
        "wg.key": "dim",
        "wg.id": "bold blue",
        "wg.path": "dim",
        "wg.source": "magenta",
    }
)

_STATUS_STYLES: dict[str, str] = {
    "installed": "wg.ok",
    "failed": "wg.error",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=WINGETCTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_status(status: str) -> str:
    """Return the Rich style name for an install status."""
    return _STATUS_STYLES.get(status, "")
