# src/ui/live_buffer.py
# Terminal edit buffer for animated field edits: a rich Live view scrolled to the cursor

from __future__ import annotations

import time
from typing import Any, Callable

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ..core.edit_executor import TextBuffer
from ..quill_io.console import get_console

HIGHLIGHT_STYLE = "black on yellow"
CURSOR_STYLE = "reverse"


# * TextBuffer that redraws a window of lines around the focus point after every change
class LiveBuffer(TextBuffer):
    def __init__(
        self,
        text: str = "",
        console: Console | None = None,
        context_lines: int = 4,
        title: str = "resume.tex",
        clock: Callable[[], float] = time.monotonic,
    ):
        super().__init__(text)
        self._console = console or get_console()
        self._context_lines = context_lines
        self._title = title
        self._clock = clock
        self._cursor = 0
        self._highlight: tuple[int, int, float] | None = None  # start, end, expires at
        self._live: Live | None = None

    def __enter__(self) -> "LiveBuffer":
        self.start()
        return self

    def __exit__(self, *exc: Any) -> None:
        self.stop()

    def start(self) -> None:
        if self._live is None:
            self._live = Live(
                console=self._console,
                get_renderable=self.render,
                refresh_per_second=30,
                transient=False,
            )
            self._live.start()

    def stop(self) -> None:
        if self._live is not None:
            self._highlight = None
            self._live.stop()
            self._live = None

    def delete(self, start: int, end: int) -> None:
        super().delete(start, end)
        self._cursor = start
        self._refresh()

    def insert(self, position: int, text: str) -> None:
        super().insert(position, text)
        self._cursor = position + len(text)
        self._refresh()

    def focus(self, position: int) -> None:
        super().focus(position)
        self._cursor = position
        self._refresh()

    def highlight(self, start: int, end: int, duration: float) -> None:
        super().highlight(start, end, duration)
        self._highlight = (start, end, self._clock() + duration)
        self._refresh()

    def _refresh(self) -> None:
        if self._live is not None:
            self._live.refresh()

    # * Window of lines around the cursor w/ line numbers, cursor & active highlight
    def render(self) -> Panel:
        text = self.text()
        cursor = min(self._cursor, len(text))
        lines = text.split("\n")
        cursor_line = text.count("\n", 0, cursor)

        first = max(0, cursor_line - self._context_lines)
        last = min(len(lines), cursor_line + self._context_lines + 1)
        window_start = sum(len(line) + 1 for line in lines[:first])

        body = Text("\n".join(lines[first:last]))
        highlight = self._highlight
        if highlight is not None and highlight[2] > self._clock():
            # clamp to the window; negative offsets would wrap around in rich
            start = max(0, highlight[0] - window_start)
            end = max(0, min(len(body.plain), highlight[1] - window_start))
            if end > start:
                body.stylize(HIGHLIGHT_STYLE, start, end)
        cursor_offset = cursor - window_start
        if 0 <= cursor_offset < len(body.plain):
            body.stylize(CURSOR_STYLE, cursor_offset, cursor_offset + 1)

        gutter = Text(
            "\n".join(f"{n:>4} " for n in range(first + 1, last + 1)),
            style="dim",
        )
        grid = Text.assemble(*_interleave(gutter, body))
        return Panel(Group(grid), title=self._title, border_style="cyan")


# join gutter & body line by line into one Text
def _interleave(gutter: Text, body: Text) -> list[Text]:
    parts: list[Text] = []
    gutter_lines = gutter.split("\n")
    body_lines = body.split("\n", allow_blank=True)
    for i, number in enumerate(gutter_lines):
        parts.append(number)
        if i < len(body_lines):
            parts.append(body_lines[i])
        if i < len(gutter_lines) - 1:
            parts.append(Text("\n"))
    return parts
