# src/core/patch_resolver.py
# Merge an AI reply into the current document by section, preamble or best-effort line replacement
#
# * The resolver never raises: a reply that cannot be placed produces a warning instead of an error,
# * and a failed section lookup never discards the user's document.

from __future__ import annotations

import re
from dataclasses import dataclass

from ..quill_io.latex_patterns import (
    ITEMIZE_CLOSE,
    ITEMIZE_OPEN,
    RSECTION_CLOSE_RE,
    RSECTION_OPEN_RE,
)
from .constants import (
    LOW_CONFIDENCE_WARNING,
    MIN_SEARCH_TERM_LENGTH,
    SMART_MERGE_MAX_LINES,
    UpdateType,
)
from .response_classifier import (
    Fragment,
    FullReplacement,
    PreambleUpdate,
    SectionUpdate,
    classify_response,
    extract_code_block,
    extract_section_content,
    identify_section,
)
from .section_locator import find_body_start, find_section_in_lines
from .types import SectionBoundary, UpdateResult, join_lines, split_lines
from .verbose import vlog_merge

# editing verbs removed before picking smart-merge search terms
_EDIT_VERB_RE = re.compile(
    r"\b(?:change|update|modify|edit|add|remove|delete|fix)\b", re.IGNORECASE
)
_TERM_PUNCTUATION = ".,;:!?\"'()"

SECTION_NOT_FOUND_WARNING = "{section} section not found, inserted at top of document"
NO_BODY_WARNING = (
    "{section} section not found and document has no \\begin{{document}}; nothing was changed"
)


# * Result of a section or smart merge
@dataclass(slots=True)
class MergeOutcome:
    document: str
    warning: str | None = None
    section: str | None = None
    located: bool = False  # target section boundary was found


# * Trailing \end{itemize} of a body whose header line opens the list ([] when there is none)
def list_closer(boundary: SectionBoundary | None) -> list[str]:
    if boundary is None or not boundary.section_header.rstrip().endswith(ITEMIZE_OPEN):
        return []
    body = [line for line in boundary.section_content if line.strip()]
    if body and body[-1].strip() == ITEMIZE_CLOSE:
        return [body[-1]]
    return []


# * Drop list markers the document keeps itself when its header line opens the list
def _strip_redundant_itemize(content: str, boundary: SectionBoundary | None) -> str:
    if not list_closer(boundary):
        return content
    lines = split_lines(content)

    # echoed body: the reply ends w/ the document's own closer
    if content.count(ITEMIZE_CLOSE) > content.count(ITEMIZE_OPEN) and lines[-1].strip() == ITEMIZE_CLOSE:
        return join_lines(lines[:-1]).rstrip("\n")

    if len(lines) < 2:
        return content
    if lines[0].strip() != ITEMIZE_OPEN or lines[-1].strip() != ITEMIZE_CLOSE:
        return content

    # nested or sibling lists mean the outer pair is not a single wrapper
    inner = join_lines(lines[1:-1])
    if ITEMIZE_OPEN in inner or ITEMIZE_CLOSE in inner:
        return content
    return inner.strip("\n")


# * Strip fences & echoed section wrappers from a section reply
def strip_section_wrappers(content: str, boundary: SectionBoundary | None = None) -> str:
    cleaned = extract_section_content(content)
    cleaned = RSECTION_OPEN_RE.sub("", cleaned)
    cleaned = RSECTION_CLOSE_RE.sub("", cleaned)
    cleaned = cleaned.strip()
    return _strip_redundant_itemize(cleaned, boundary)


# * Replace a section body, or insert the content after \begin{document} when the section is missing
def merge_section(document: str, content: str, section: str) -> MergeOutcome:
    lines = split_lines(document)
    boundary = find_section_in_lines(lines, section)
    cleaned = strip_section_wrappers(content, boundary)

    if boundary is None:
        body = find_body_start(lines)
        if body is not None:
            merged = lines[: body + 1] + ["", cleaned, ""] + lines[body + 1 :]
            warning = SECTION_NOT_FOUND_WARNING.format(section=section)
        else:
            warning = NO_BODY_WARNING.format(section=section)
            vlog_merge("Section skipped", section, warning)
            return MergeOutcome(document, warning=warning, section=section)
        vlog_merge("Section insert", section, warning)
        return MergeOutcome(join_lines(merged), warning=warning, section=section)

    # a list opened on the header line keeps its own closer
    merged = (
        boundary.lines_before
        + [boundary.section_header, "", cleaned]
        + list_closer(boundary)
        + [""]
        + boundary.lines_after
    )
    vlog_merge(
        "Section replace",
        section,
        f"Lines {boundary.content_start}-{boundary.end} ({len(boundary.section_content)} old lines)",
    )
    return MergeOutcome(join_lines(merged), section=section, located=True)


# * Words from the instruction used to find a line the fragment should replace
def search_terms(instruction: str) -> list[str]:
    stripped = _EDIT_VERB_RE.sub(" ", instruction.lower())
    terms = []
    for word in stripped.split():
        term = word.strip(_TERM_PUNCTUATION)
        if len(term) > MIN_SEARCH_TERM_LENGTH:
            terms.append(term)
    return terms


# * Best-effort merge for an unclassified fragment
def smart_merge(document: str, reply: str, instruction: str) -> MergeOutcome:
    cleaned = extract_section_content(reply)
    terms = search_terms(instruction)

    # short fragments replace the first line that mentions a search term
    if terms and len(split_lines(cleaned)) < SMART_MERGE_MAX_LINES:
        lines = split_lines(document)
        for i, line in enumerate(lines):
            lowered = line.lower()
            hit = next((term for term in terms if term in lowered), None)
            if hit is not None:
                lines[i] = cleaned
                vlog_merge("Smart line replace", None, f"Line {i} matched '{hit}'")
                return MergeOutcome(join_lines(lines))

    section = identify_section(cleaned, instruction)
    if section:
        return merge_section(document, cleaned, section)

    vlog_merge("Low-confidence replace", None, LOW_CONFIDENCE_WARNING)
    return MergeOutcome(cleaned, warning=LOW_CONFIDENCE_WARNING)


# * Resolve an AI reply against the current document
def resolve_patch(document: str, reply: str, instruction: str) -> UpdateResult:
    code = extract_code_block(reply)
    if code is None:
        code = reply

    classification = classify_response(document, code, instruction)

    if isinstance(classification, FullReplacement):
        vlog_merge("Full replacement")
        return UpdateResult(classification.document, UpdateType.FULL)

    if isinstance(classification, PreambleUpdate):
        vlog_merge("Preamble update", "contact info", ", ".join(classification.commands))
        return UpdateResult(
            classification.document, UpdateType.PREAMBLE, section="contact info"
        )

    if isinstance(classification, SectionUpdate):
        outcome = merge_section(document, classification.content, classification.section)
        return UpdateResult(
            outcome.document,
            UpdateType.SECTION,
            section=classification.section,
            warning=outcome.warning,
        )

    if isinstance(classification, Fragment):
        outcome = smart_merge(document, classification.content, instruction)
        return UpdateResult(
            outcome.document,
            UpdateType.SMART,
            section=outcome.section,
            warning=outcome.warning,
        )

    raise TypeError(f"Unknown classification: {type(classification).__name__}")


__all__ = [
    "MergeOutcome",
    "list_closer",
    "strip_section_wrappers",
    "merge_section",
    "search_terms",
    "smart_merge",
    "resolve_patch",
]
