# src/core/output.py
# Log categories, verbosity levels & the output registry core modules log through
# * Pure module (no I/O); the rich-backed manager lives in src/cli/output_manager.py

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, StrEnum
from typing import Protocol, runtime_checkable


# * Output verbosity levels, from least to most verbose
class OutputLevel(IntEnum):
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2
    DEBUG = 3


# * Tag on every verbose line, naming the stage of a chat turn that produced it
class LogCategory(StrEnum):
    LOCATE = "LOCATE"  # section boundary lookups
    MERGE = "MERGE"  # reply classification & patch resolution
    EDIT = "EDIT"  # field fast-path edits
    SESSION = "SESSION"
    CACHE = "CACHE"
    AI = "AI"
    FILE = "FILE"
    COMPILE = "COMPILE"
    THINK = "THINK"
    ERROR = "ERROR"
    DEBUG = "DEBUG"


CATEGORY_STYLES: dict[LogCategory, str] = {
    LogCategory.LOCATE: "bold blue",
    LogCategory.MERGE: "bold green",
    LogCategory.EDIT: "bold yellow",
    LogCategory.SESSION: "bold cyan",
    LogCategory.CACHE: "cyan",
    LogCategory.AI: "bold magenta",
    LogCategory.FILE: "dim cyan",
    LogCategory.COMPILE: "bold white",
    LogCategory.THINK: "italic magenta",
    LogCategory.ERROR: "bold red",
    LogCategory.DEBUG: "magenta",
}


# rich theme style name for a category; unknown categories share the session style
def category_style(category: str) -> str:
    try:
        return f"log.{LogCategory(category).value.lower()}"
    except ValueError:
        return "log.session"


# * Protocol implemented by every output manager
@runtime_checkable
class OutputInterface(Protocol):
    def get_level(self) -> OutputLevel: ...

    def is_debug_enabled(self) -> bool: ...

    def is_verbose_enabled(self) -> bool: ...

    def debug(self, msg: str, category: str = LogCategory.DEBUG) -> None: ...

    def verbose(self, msg: str, category: str = LogCategory.SESSION, detail: str | None = None) -> None: ...

    def warning(self, msg: str) -> None: ...

    def start_session(self) -> None: ...

    def end_session(self) -> None: ...


# Silent manager used until the CLI registers a real one
class NullOutputManager:
    def get_level(self) -> OutputLevel:
        return OutputLevel.NORMAL

    def is_debug_enabled(self) -> bool:
        return False

    def is_verbose_enabled(self) -> bool:
        return False

    def debug(self, msg: str, category: str = LogCategory.DEBUG) -> None:
        pass

    def verbose(self, msg: str, category: str = LogCategory.SESSION, detail: str | None = None) -> None:
        pass

    def warning(self, msg: str) -> None:
        pass

    def start_session(self) -> None:
        pass

    def end_session(self) -> None:
        pass


@dataclass(slots=True, frozen=True)
class LogRecord:
    category: str
    message: str
    detail: str | None = None


# * Keeps every line in memory instead of printing; lets callers inspect what a turn did
class RecordingOutputManager(NullOutputManager):
    def __init__(self, level: OutputLevel = OutputLevel.DEBUG):
        self.level = level
        self.records: list[LogRecord] = []

    def get_level(self) -> OutputLevel:
        return self.level

    def is_debug_enabled(self) -> bool:
        return self.level >= OutputLevel.DEBUG

    def is_verbose_enabled(self) -> bool:
        return self.level >= OutputLevel.VERBOSE

    def debug(self, msg: str, category: str = LogCategory.DEBUG) -> None:
        if self.is_debug_enabled():
            self.records.append(LogRecord(str(category), msg))

    def verbose(self, msg: str, category: str = LogCategory.SESSION, detail: str | None = None) -> None:
        if self.is_verbose_enabled():
            self.records.append(LogRecord(str(category), msg, detail))

    def warning(self, msg: str) -> None:
        self.records.append(LogRecord("WARNING", msg))

    def messages(self, category: str) -> list[str]:
        return [r.message for r in self.records if r.category == category]


_output_manager: OutputInterface = NullOutputManager()


# * Register the output manager implementation (called by CLI at startup)
def set_output_manager(manager: OutputInterface) -> None:
    global _output_manager
    _output_manager = manager


def get_output_manager() -> OutputInterface:
    return _output_manager


# * Reset to NullOutputManager (for testing)
def reset_output_manager() -> None:
    global _output_manager
    _output_manager = NullOutputManager()
