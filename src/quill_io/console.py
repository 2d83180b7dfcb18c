# src/quill_io/console.py
# Shared rich Console carrying Quill's theme (log category & status styles)
#
# - Module-level `console` is a proxy so tests can swap the real Console under existing imports
# - Tests: configure_console(record=True) to capture output, reset_console() to restore

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.theme import Theme

from ..core.output import CATEGORY_STYLES, category_style

# * Named styles usable in markup, e.g. "[log.merge]" or "[warning]"
QUILL_THEME = Theme(
    {
        **{category_style(category): style for category, style in CATEGORY_STYLES.items()},
        "warning": "yellow",
        "error": "bold red",
        "path": "cyan",
    }
)


def _new_console(**kwargs: Any) -> Console:
    return Console(theme=QUILL_THEME, **kwargs)


class _ConsoleProxy:
    __slots__ = ("_console",)

    def __init__(self) -> None:
        self._console = _new_console()

    def __getattr__(self, name: str) -> Any:
        return getattr(self._console, name)


console = _ConsoleProxy()


def get_console() -> Console:
    return console._console


# * Swap in a fresh themed console (record=True keeps output for export_text())
def configure_console(
    width: int | None = None,
    force_terminal: bool | None = None,
    record: bool = False,
) -> Console:
    console._console = _new_console(width=width, force_terminal=force_terminal, record=record)
    return console._console


def reset_console() -> Console:
    return configure_console()


__all__ = [
    "QUILL_THEME",
    "console",
    "get_console",
    "configure_console",
    "reset_console",
]
