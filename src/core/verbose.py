# src/core/verbose.py
# Verbose logging helpers for merges, section lookups, field edits, AI calls & file I/O
# * All delegate to the registered OutputManager, tagged w/ a LogCategory

from __future__ import annotations

from pathlib import Path
from .output import LogCategory, OutputLevel, get_output_manager, set_output_manager


# * Initialize verbose logging for a CLI invocation
def init_verbose(
    enabled: bool = False,
    log_file: Path | None = None,
    dev_mode: bool = False,
) -> None:
    if enabled and dev_mode:
        requested_level = OutputLevel.DEBUG
    elif enabled:
        requested_level = OutputLevel.VERBOSE
    else:
        requested_level = OutputLevel.NORMAL

    from ..cli.output_manager import OutputManager

    manager = OutputManager()
    manager.initialize(
        requested_level=requested_level,
        dev_mode=dev_mode,
        log_file=log_file,
    )
    set_output_manager(manager)


# * Core verbose logging function
def vlog(category: LogCategory, message: str, detail: str | None = None) -> None:
    get_output_manager().verbose(message, category, detail)


# * Log AI chat request (before making the call)
def vlog_ai_request(
    provider: str,
    model: str,
    message_count: int,
    prompt_length: int,
    temperature: float | None = None,
) -> None:
    temp_str = f", temp={temperature}" if temperature is not None else ""
    detail = f"Model: {model}, Messages: {message_count}, Prompt: {prompt_length:,} chars{temp_str}"
    vlog(LogCategory.AI, f"Request to {provider}", detail)


def vlog_ai_response(
    provider: str,
    model: str,
    response_length: int,
    success: bool,
    duration_ms: float | None = None,
    error: str | None = None,
) -> None:
    duration_str = f" in {duration_ms:.0f}ms" if duration_ms else ""
    if success:
        detail = f"Model: {model}, Response: {response_length:,} chars"
        vlog(LogCategory.AI, f"Response from {provider}{duration_str}", detail)
    else:
        vlog(LogCategory.AI, f"[red]Error from {provider}[/]{duration_str}", f"Model: {model}, Error: {error}")


def vlog_file_read(path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    vlog(LogCategory.FILE, f"Read: {path}{size_str}")


def vlog_file_write(path: Path, size: int | None = None) -> None:
    size_str = f" ({size:,} bytes)" if size is not None else ""
    vlog(LogCategory.FILE, f"Write: {path}{size_str}")


# * Log a section lookup; found=False when no header matched
def vlog_locate(section: str, found: bool, detail: str | None = None) -> None:
    status = "located" if found else "not found"
    vlog(LogCategory.LOCATE, f"Section '{section}' {status}", detail)


# * Log a patch-resolution decision
def vlog_merge(strategy: str, section: str | None = None, detail: str | None = None) -> None:
    target = f" -> {section}" if section else ""
    vlog(LogCategory.MERGE, f"{strategy}{target}", detail)


# * Log a field edit applied to the buffer
def vlog_edit(field: str, start: int, detail: str | None = None) -> None:
    vlog(LogCategory.EDIT, f"{field} at offset {start}", detail)


def vlog_think(thought: str) -> None:
    vlog(LogCategory.THINK, thought)

