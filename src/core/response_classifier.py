# src/core/response_classifier.py
# Classify an untrusted AI reply as full document, preamble field update, section update or loose fragment

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Union

from ..quill_io.latex_patterns import (
    BEGIN_DOCUMENT_RE,
    CODE_FENCE_RE,
    EMBEDDED_TITLE_PATTERNS,
    PREAMBLE_COMMAND_RE,
    STRUCTURAL_COMMANDS,
    is_full_document,
)
from ..quill_io.shared_patterns import infer_section_kind
from .types import join_lines, split_lines
from .output import LogCategory
from .verbose import vlog

# first fenced code block in a chat reply (```latex, ```tex or bare ```)
_CODE_BLOCK_RE = re.compile(r"```(?:latex|tex)?[ \t]*\n([\s\S]*?)\n[ \t]*```", re.IGNORECASE)


# * Reply is a complete replacement document
@dataclass(frozen=True)
class FullReplacement:
    document: str


# * Reply only changed preamble commands (name, address, ...)
@dataclass(frozen=True)
class PreambleUpdate:
    document: str
    commands: tuple[str, ...] = field(default_factory=tuple)


# * Reply is the body of a known section
@dataclass(frozen=True)
class SectionUpdate:
    section: str
    content: str


# * Reply could not be classified; needs best-effort merge
@dataclass(frozen=True)
class Fragment:
    content: str


Classification = Union[FullReplacement, PreambleUpdate, SectionUpdate, Fragment]


# * Pull the first fenced code block out of a chat reply (None when there is none)
def extract_code_block(reply: str) -> str | None:
    match = _CODE_BLOCK_RE.search(reply)
    if match is None:
        return None
    return match.group(1)


# * Strip code fences & surrounding whitespace from AI code
def extract_section_content(reply: str) -> str:
    return CODE_FENCE_RE.sub("", reply).strip()


# * Infer target section from the instruction first, then from a title embedded in the reply
def identify_section(content: str, instruction: str) -> str | None:
    section = infer_section_kind(instruction)
    if section:
        return section

    for pattern in EMBEDDED_TITLE_PATTERNS:
        match = pattern.search(content)
        if match:
            section = infer_section_kind(match.group(1))
            if section:
                return section
    return None


# * Replace preamble commands that the reply redefines; returns (document, commands) or None
def update_preamble_commands(
    document: str, reply: str
) -> tuple[str, tuple[str, ...]] | None:
    lines = split_lines(document)
    replaced: list[str] = []

    for match in PREAMBLE_COMMAND_RE.finditer(reply):
        new_command = match.group(0)
        if "\n" in new_command:
            continue
        name = match.group(1)
        if name in STRUCTURAL_COMMANDS:
            continue

        target = re.compile(rf"\\{re.escape(name)}\{{[^}}\n]*\}}")
        for i, line in enumerate(lines):
            if BEGIN_DOCUMENT_RE.search(line):
                break
            if target.search(line):
                # callable repl keeps backslashes in the command literal
                lines[i] = target.sub(lambda _m: new_command, line, count=1)
                replaced.append(name)
                break

    if not replaced:
        return None
    return join_lines(lines), tuple(replaced)


# * Classify a reply; first matching rule wins (full -> preamble -> section -> fragment)
def classify_response(document: str, reply: str, instruction: str) -> Classification:
    if is_full_document(reply):
        vlog(LogCategory.MERGE, "Reply classified as full document")
        return FullReplacement(document=reply)

    preamble = update_preamble_commands(document, extract_section_content(reply))
    if preamble is not None:
        new_document, commands = preamble
        vlog(LogCategory.MERGE, "Reply classified as preamble update", ", ".join(commands))
        return PreambleUpdate(document=new_document, commands=commands)

    section = identify_section(reply, instruction)
    if section:
        vlog(LogCategory.MERGE, f"Reply classified as '{section}' section update")
        return SectionUpdate(section=section, content=reply)

    vlog(LogCategory.MERGE, "Reply classified as unstructured fragment")
    return Fragment(content=extract_section_content(reply))


__all__ = [
    "FullReplacement",
    "PreambleUpdate",
    "SectionUpdate",
    "Fragment",
    "Classification",
    "extract_code_block",
    "extract_section_content",
    "identify_section",
    "update_preamble_commands",
    "classify_response",
]
