# src/core/field_locator.py
# Resolve which header field a free-text command targets, locate its current value & extract the new one

from __future__ import annotations

from ..quill_io.latex_patterns import (
    FIELD_PATTERNS,
    EDIT_VERBS,
    NEW_VALUE_RE,
    VALUE_CONNECTOR_RE,
    FieldSpec,
)
from .constants import NO_FIELD_REASON
from .output import LogCategory
from .types import FieldLookup, FieldMatch, TextSpan
from .verbose import vlog


# * Cheap gate: does the instruction look like a direct field edit at all?
def detect_edit_command(instruction: str) -> bool:
    lowered = instruction.lower()
    triggers = EDIT_VERBS + tuple(FIELD_PATTERNS)
    return any(trigger in lowered for trigger in triggers)


# * Check keyword triggers for a field (case-insensitive substring containment)
def has_field_keyword(instruction: str, spec: FieldSpec) -> bool:
    lowered = instruction.lower()
    return any(keyword in lowered for keyword in spec.keywords)


# * Extract the requested new value from an instruction; "" when nothing usable
def extract_new_value(instruction: str, keywords: tuple[str, ...]) -> str:
    match = NEW_VALUE_RE.search(instruction)
    if match:
        value = match.group(1).strip()
        if value:
            return value

    # fallback: everything after the last keyword occurrence
    lowered = instruction.lower()
    cut = -1
    for keyword in keywords:
        idx = lowered.rfind(keyword)
        if idx != -1:
            cut = max(cut, idx + len(keyword))

    if cut == -1:
        return ""
    tail = instruction[cut:].strip()
    return VALUE_CONNECTOR_RE.sub("", tail).strip()


# * Locate the field targeted by an instruction (read-only; never mutates the document)
def locate_field(document: str, instruction: str) -> FieldLookup:
    for field_name, spec in FIELD_PATTERNS.items():
        if not has_field_keyword(instruction, spec):
            continue

        for pattern in spec.patterns:
            match = pattern.search(document)
            if match is None:
                continue

            group = 1 if pattern.groups >= 1 else 0
            span = TextSpan(match.start(group), match.end(group))
            new_value = extract_new_value(instruction, spec.keywords)

            vlog(
                LogCategory.LOCATE,
                f"Field '{field_name}' matched at {span.start}-{span.end}",
                f"Pattern: {pattern.pattern}",
            )
            return FieldLookup(
                found=True,
                match=FieldMatch(
                    field=field_name,
                    position=span,
                    old_value=match.group(group),
                    new_value=new_value,
                    pattern=match.group(0),
                ),
            )

    return FieldLookup(found=False, reason=NO_FIELD_REASON)


# * Apply a field match instantly (literal span replacement)
def apply_field_match(document: str, match: FieldMatch) -> str:
    start, end = match.position.start, match.position.end
    return document[:start] + match.new_value + document[end:]


__all__ = [
    "detect_edit_command",
    "has_field_keyword",
    "extract_new_value",
    "locate_field",
    "apply_field_match",
]
