"""Rich Console factory and theme for kbcheck output.

Consoles render into a StringIO buffer so renderers stay pure
``ServiceResult -> str`` functions. Rich drops color codes on its own when
the buffer is not a terminal (tests, pipes).
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

KB_THEME = Theme(
    {
        "kb.ok": "bold green",
        "kb.fail": "bold red",
        "kb.error": "bold red",
        "kb.op": "bold cyan",
        "kb.key": "dim",
        "kb.secret": "magenta",
        "kb.path": "dim",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes.
        width: Override terminal width (keeps test output stable).
    """
    return Console(
        file=StringIO(),
        theme=KB_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
