# src/core/edit_executor.py
# Fast-path field edits applied to a live buffer as a visible delete-then-type sequence
#
# * The animation is cosmetic: after any number of steps, or after an interruption,
# * the buffer ends up identical to an instantaneous replace of the located span.

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

from .constants import EDITOR_BUSY_ERROR, NO_VALUE_ERROR, EditPhase
from .field_locator import locate_field
from .types import EditOutcome, FieldLookup, TextSpan
from .output import LogCategory
from .verbose import vlog, vlog_edit


# * Operations the executor needs from an editable text view
class EditBuffer(Protocol):
    def text(self) -> str: ...

    def delete(self, start: int, end: int) -> None: ...

    def insert(self, position: int, text: str) -> None: ...

    def focus(self, position: int) -> None: ...

    def highlight(self, start: int, end: int, duration: float) -> None: ...


# * In-memory buffer; records focus & highlight calls so callers can inspect them
class TextBuffer:
    def __init__(self, text: str = ""):
        self._text = text
        self.focus_history: list[int] = []
        self.highlights: list[tuple[int, int, float]] = []

    def text(self) -> str:
        return self._text

    def delete(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(f"Invalid delete range {start}-{end} for buffer of {len(self._text)} chars")
        self._text = self._text[:start] + self._text[end:]

    def insert(self, position: int, text: str) -> None:
        if not 0 <= position <= len(self._text):
            raise ValueError(f"Invalid insert position {position} for buffer of {len(self._text)} chars")
        self._text = self._text[:position] + text + self._text[position:]

    def focus(self, position: int) -> None:
        self.focus_history.append(position)

    def highlight(self, start: int, end: int, duration: float) -> None:
        self.highlights.append((start, end, duration))


# * Pace & feedback settings for one animated edit (seconds)
@dataclass
class AnimationOptions:
    speed: float = 0.03  # delay per deleted or typed character
    highlight_duration: float = 1.5
    scroll_delay: float = 0.3
    show_highlight: bool = True

    @classmethod
    def instant(cls) -> "AnimationOptions":
        return cls(speed=0.0, highlight_duration=0.0, scroll_delay=0.0, show_highlight=False)

    @classmethod
    def from_settings(cls, settings: Any) -> "AnimationOptions":
        return cls(
            speed=settings.animation_speed,
            highlight_duration=settings.highlight_duration,
            scroll_delay=settings.scroll_delay,
        )

    # upper bound on wall-clock time for replacing old_len chars w/ new_len chars
    def max_duration(self, old_len: int, new_len: int) -> float:
        highlights = 2 * self.highlight_duration if self.show_highlight else 0.0
        return (old_len + new_len) * self.speed + self.scroll_delay + highlights


# * Explicit state machine for a delete-then-insert replacement
# Deletion runs backwards from the end of the old value, insertion forwards from the start
@dataclass
class AnimatedEdit:
    buffer: EditBuffer
    start: int
    old_value: str
    new_value: str
    phase: EditPhase = EditPhase.IDLE
    deleted: int = field(default=0, init=False)
    inserted: int = field(default=0, init=False)

    @property
    def total_steps(self) -> int:
        return len(self.old_value) + len(self.new_value)

    @property
    def steps_done(self) -> int:
        return self.deleted + self.inserted

    @property
    def done(self) -> bool:
        return self.phase is EditPhase.DONE

    def _advance_phase(self) -> None:
        if self.deleted < len(self.old_value):
            self.phase = EditPhase.DELETING
        elif self.inserted < len(self.new_value):
            self.phase = EditPhase.INSERTING
        else:
            self.phase = EditPhase.DONE

    # * Perform exactly one unit operation; returns the phase after the step
    def step(self) -> EditPhase:
        if self.phase is EditPhase.IDLE:
            self._advance_phase()

        if self.phase is EditPhase.DELETING:
            end = self.start + len(self.old_value) - self.deleted
            self.buffer.delete(end - 1, end)
            self.deleted += 1
        elif self.phase is EditPhase.INSERTING:
            position = self.start + self.inserted
            self.buffer.insert(position, self.new_value[self.inserted])
            self.inserted += 1

        self._advance_phase()
        return self.phase

    # * Apply all remaining work at once
    def complete(self) -> None:
        if self.phase is EditPhase.DONE:
            return
        remaining_old = len(self.old_value) - self.deleted
        if remaining_old:
            self.buffer.delete(self.start, self.start + remaining_old)
            self.deleted = len(self.old_value)
        if self.inserted < len(self.new_value):
            position = self.start + self.inserted
            self.buffer.insert(position, self.new_value[self.inserted :])
            self.inserted = len(self.new_value)
        self.phase = EditPhase.DONE


# * Runs field edit commands against one buffer; at most one edit in flight
class EditExecutor:
    def __init__(
        self,
        buffer: EditBuffer,
        scheduler: Callable[[float], None] = time.sleep,
    ):
        self.buffer = buffer
        self._scheduler = scheduler
        self._busy = False
        self._lock = threading.Lock()

    @property
    def is_busy(self) -> bool:
        return self._busy

    def _wait(self, seconds: float) -> None:
        if seconds > 0:
            self._scheduler(seconds)

    # * Locate the targeted field in the buffer (or in the given text)
    def parse_edit_command(
        self, instruction: str, current_text: str | None = None
    ) -> FieldLookup:
        text = self.buffer.text() if current_text is None else current_text
        return locate_field(text, instruction)

    # * Parse & apply a field edit command; rejected (not queued) while another edit runs
    def execute_edit_command(
        self, instruction: str, options: AnimationOptions | None = None
    ) -> EditOutcome:
        with self._lock:
            if self._busy:
                vlog(LogCategory.EDIT, "Edit rejected: editor busy")
                return EditOutcome(success=False, error=EDITOR_BUSY_ERROR)
            self._busy = True

        try:
            lookup = self.parse_edit_command(instruction)
            if not lookup.found or lookup.match is None:
                return EditOutcome(success=False, error=lookup.reason)

            match = lookup.match
            if not match.new_value:
                return EditOutcome(
                    success=False,
                    field=match.field,
                    old_value=match.old_value,
                    error=NO_VALUE_ERROR,
                )

            self._animate_replace(match.position, match.old_value, match.new_value, options or AnimationOptions())
            vlog_edit(
                match.field,
                match.position.start,
                f"'{match.old_value}' -> '{match.new_value}'",
            )
            return EditOutcome(
                success=True,
                field=match.field,
                old_value=match.old_value,
                new_value=match.new_value,
                position=match.position,
            )
        finally:
            with self._lock:
                self._busy = False

    def _animate_replace(
        self,
        span: TextSpan,
        old_value: str,
        new_value: str,
        options: AnimationOptions,
    ) -> None:
        edit = AnimatedEdit(self.buffer, span.start, old_value, new_value)
        try:
            self.buffer.focus(span.start)
            self._wait(options.scroll_delay)

            if options.show_highlight:
                self.buffer.highlight(span.start, span.end, options.highlight_duration)
                self._wait(options.highlight_duration)

            while not edit.done:
                edit.step()
                self._wait(options.speed)

            if options.show_highlight and new_value:
                self.buffer.highlight(
                    span.start, span.start + len(new_value), options.highlight_duration
                )
        except BaseException:
            # leave the buffer as if the replace were instantaneous, then propagate
            edit.complete()
            raise


__all__ = [
    "EditBuffer",
    "TextBuffer",
    "AnimationOptions",
    "AnimatedEdit",
    "EditExecutor",
]
