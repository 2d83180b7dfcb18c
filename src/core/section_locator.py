# src/core/section_locator.py
# Locate the line range of a logical résumé section across the supported heading syntaxes
#
# * The earliest terminating marker always wins: stopping early on an ambiguous line is
# * preferred over swallowing the following section.

from __future__ import annotations

from ..quill_io.latex_patterns import (
    BEGIN_DOCUMENT_RE,
    is_section_terminator,
    section_marker_patterns,
)
from .types import SectionBoundary, split_lines
from .verbose import vlog_locate


# * Find the section header line; first line matching any title/syntax pattern wins
def find_section_start(lines: list[str], section: str) -> int | None:
    patterns = section_marker_patterns(section)
    for i, line in enumerate(lines):
        if any(pattern.search(line) for pattern in patterns):
            return i
    return None


# first non-blank line strictly after the header
def _content_start(lines: list[str], header: int) -> int:
    idx = header + 1
    while idx < len(lines) and lines[idx].strip() == "":
        idx += 1
    return idx


# first terminating line at or after content start (len(lines) if none)
def _section_end(lines: list[str], content_start: int) -> int:
    for i in range(content_start, len(lines)):
        if is_section_terminator(lines[i]):
            return i
    return len(lines)


# * Compute section boundary from pre-split lines; None when no header matches
def find_section_in_lines(lines: list[str], section: str) -> SectionBoundary | None:
    start = find_section_start(lines, section)
    if start is None:
        vlog_locate(section, found=False)
        return None

    content_start = _content_start(lines, start)
    end = _section_end(lines, content_start)

    vlog_locate(section, found=True, detail=f"Lines {start}-{end}, header: {lines[start].strip()}")
    return SectionBoundary(
        start=start,
        content_start=content_start,
        end=end,
        lines_before=lines[:start],
        section_header=lines[start],
        section_content=lines[content_start:end],
        lines_after=lines[end:],
    )


# * Compute section boundary for a document string
def find_section_boundaries(document: str, section: str) -> SectionBoundary | None:
    return find_section_in_lines(split_lines(document), section)


# * Index of the \begin{document} line, used as the insertion fallback anchor
def find_body_start(lines: list[str]) -> int | None:
    for i, line in enumerate(lines):
        if BEGIN_DOCUMENT_RE.search(line):
            return i
    return None


__all__ = [
    "find_section_start",
    "find_section_in_lines",
    "find_section_boundaries",
    "find_body_start",
]
