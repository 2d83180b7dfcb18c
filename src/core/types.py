# src/core/types.py
# Core value types shared by the locators, resolver, executor & session

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from .constants import UpdateType, OutcomeKind


# * Split document text into lines (documents are plain "\n"-separated text)
def split_lines(text: str) -> list[str]:
    return text.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)


# * Character offsets into a document string
@dataclass(frozen=True, slots=True)
class TextSpan:
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start


# * Located scalar field w/ the value the user asked for
@dataclass(slots=True)
class FieldMatch:
    field: str
    position: TextSpan
    old_value: str
    new_value: str
    pattern: str  # full matched text incl. surrounding command wrapper


# * Result of a field lookup; found=False carries the reason
@dataclass(slots=True)
class FieldLookup:
    found: bool
    match: FieldMatch | None = None
    reason: str = ""


# * Line range occupied by a section; computed per query, never cached
@dataclass(frozen=True)
class SectionBoundary:
    start: int  # header line
    content_start: int  # first non-blank line after header
    end: int  # first terminating line (or len(lines))
    lines_before: list[str]
    section_header: str
    section_content: list[str]
    lines_after: list[str]  # starts w/ the terminator (e.g. \end{rSection})


# * Output contract of the patch resolver
@dataclass(slots=True)
class UpdateResult:
    document: str
    update_type: UpdateType
    section: str | None = None
    warning: str | None = None


# * One chat turn (context only, never structured state)
@dataclass(slots=True)
class ChatTurn:
    role: str  # "user" | "assistant"
    content: str
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def as_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


# * Result of executing a field edit command
@dataclass(slots=True)
class EditOutcome:
    success: bool
    field: str | None = None
    old_value: str = ""
    new_value: str = ""
    position: TextSpan | None = None
    error: str = ""


# * Result of one session turn
@dataclass(slots=True)
class SessionOutcome:
    kind: OutcomeKind
    message: str = ""  # assistant text or confirmation shown to the user
    update: UpdateResult | None = None
    edit: EditOutcome | None = None
    warning: str | None = None
    error: str = ""
    conversation_id: str | None = None
