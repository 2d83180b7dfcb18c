# src/cli/output_manager.py
# Rich-backed output manager for verbose, debug & quiet modes w/ optional log file

# * Registered via set_output_manager() at CLI startup so core modules can log through it
# * Respects layering: this module can import from quill_io & config, core never imports it

from __future__ import annotations

import time
from datetime import datetime
from pathlib import Path
from typing import Any

from rich.markup import escape

from ..core.output import LogCategory, OutputLevel, category_style


class OutputManager:
    # Implements the OutputInterface protocol for the core registry
    # Console output via Rich, plain-text copy to an optional log file

    def __init__(self) -> None:
        self._level = OutputLevel.NORMAL
        self._dev_mode = False
        self._session_start: float | None = None
        self._log_file_path: Path | None = None
        self._log_file_handle: Any = None

    def initialize(
        self,
        requested_level: OutputLevel = OutputLevel.NORMAL,
        dev_mode: bool = False,
        quiet: bool = False,
        log_file: Path | None = None,
    ) -> None:
        self._dev_mode = dev_mode
        self._level = self._compute_effective_level(requested_level, dev_mode, quiet)
        self._session_start = time.time()
        self._setup_log_file(log_file)

    # --quiet wins; DEBUG requires dev_mode (capped at VERBOSE otherwise)
    def _compute_effective_level(
        self, requested: OutputLevel, dev_mode: bool, quiet: bool
    ) -> OutputLevel:
        if quiet:
            return OutputLevel.QUIET
        max_allowed = OutputLevel.DEBUG if dev_mode else OutputLevel.VERBOSE
        return min(requested, max_allowed)

    # OutputInterface implementation

    def get_level(self) -> OutputLevel:
        return self._level

    def is_debug_enabled(self) -> bool:
        return self._level >= OutputLevel.DEBUG

    def is_verbose_enabled(self) -> bool:
        return self._level >= OutputLevel.VERBOSE

    def debug(self, msg: str, category: str = LogCategory.DEBUG) -> None:
        if self._level >= OutputLevel.DEBUG:
            from ..quill_io.console import console

            console.print(f"[{category_style(category)}]\\[{category}][/] {msg}")
            self._write_to_file(f"[{self._elapsed()}] [{category}] {msg}")

    def verbose(self, msg: str, category: str = LogCategory.SESSION, detail: str | None = None) -> None:
        if self._level >= OutputLevel.VERBOSE:
            from ..quill_io.console import console

            prefix = f"[dim]\\[{self._elapsed()}][/] [{category_style(category)}]\\[{category}][/]"
            console.print(f"{prefix} {msg}")
            if detail:
                for line in detail.split("\n"):
                    console.print(f"  [dim]{escape(line)}[/]")
            self._write_to_file(f"[{self._elapsed()}] [{category}] {msg}")
            if detail:
                for line in detail.split("\n"):
                    self._write_to_file(f"  {line}")

    def warning(self, msg: str) -> None:
        if self._level >= OutputLevel.NORMAL:
            from ..quill_io.console import console

            console.print(f"[warning]Warning:[/] {escape(msg)}")
        self._write_to_file(f"[{self._elapsed()}] [WARNING] {msg}")

    def start_session(self) -> None:
        self._session_start = time.time()
        if self._log_file_handle:
            self._write_to_file(f"\n{'='*60}")
            self._write_to_file(f"Session Started: {datetime.now().isoformat()}")
            self._write_to_file(f"Level: {self._level.name}")
            if self._dev_mode:
                self._write_to_file("Mode: Developer (dev_mode enabled)")
            self._write_to_file(f"{'='*60}\n")

    def end_session(self) -> None:
        if self._log_file_handle:
            self._write_to_file(f"\n{'='*60}")
            self._write_to_file(f"Session Ended: {datetime.now().isoformat()}")
            self._write_to_file(f"{'='*60}\n")
        self.cleanup()

    # File logging

    def _elapsed(self) -> str:
        if self._session_start is None:
            return "0.00s"
        return f"{time.time() - self._session_start:.2f}s"

    def _setup_log_file(self, log_file: Path | None) -> None:
        self.cleanup()
        self._log_file_path = log_file
        if log_file is not None:
            try:
                log_file.parent.mkdir(parents=True, exist_ok=True)
                self._log_file_handle = open(log_file, "a", encoding="utf-8")
            except OSError:
                # logging to file is optional; console output continues
                self._log_file_path = None
                self._log_file_handle = None

    def _write_to_file(self, msg: str) -> None:
        if self._log_file_handle is not None:
            try:
                self._log_file_handle.write(f"{msg}\n")
                self._log_file_handle.flush()
            except OSError:
                pass

    def cleanup(self) -> None:
        if self._log_file_handle is not None:
            try:
                self._log_file_handle.close()
            except OSError:
                pass
            self._log_file_handle = None
