# src/quill_io/latex_patterns.py
# LaTeX pattern tables for field lookup, section boundaries, reply classification & wrapper stripping
#
# * Tables are data: adding a field, a section title or a heading syntax is a table edit,
# * not a new branch in the locators that read them.

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern

# * Document structure markers
DOCUMENT_MARKERS = {
    "documentclass": "\\documentclass",
    "begin_document": "\\begin{document}",
    "end_document": "\\end{document}",
}

DOCUMENTCLASS_RE = re.compile(r"\\documentclass", re.IGNORECASE)
BEGIN_DOCUMENT_RE = re.compile(r"\\begin\{document\}", re.IGNORECASE)
END_DOCUMENT_RE = re.compile(r"\\end\{document\}", re.IGNORECASE)


# * Keyword triggers & ordered candidate patterns for one scalar field
@dataclass(frozen=True)
class FieldSpec:
    keywords: tuple[str, ...]
    # group 1 (when present) holds the value; otherwise the whole match is the value
    patterns: tuple[Pattern[str], ...]


# * Field table; declaration order of fields & patterns is the only tie-break
FIELD_PATTERNS: dict[str, FieldSpec] = {
    # "change name to John Smith"
    "name": FieldSpec(
        keywords=("name", "my name", "called"),
        patterns=(
            re.compile(r"\\name\{([^}]+)\}"),
            re.compile(r"\\author\{([^}]+)\}"),
        ),
    ),
    # "update email to john@email.com"
    "email": FieldSpec(
        keywords=("email", "e-mail", "mail"),
        patterns=(
            re.compile(r"\\email\{([^}]+)\}"),
            re.compile(r"\\href\{mailto:([^}]+)\}"),
            re.compile(r"([a-zA-Z0-9._-]+@[a-zA-Z0-9._-]+\.[a-zA-Z0-9_-]+)"),
        ),
    ),
    # "change phone to 123-456-7890"
    "phone": FieldSpec(
        keywords=("phone", "mobile", "cell", "number"),
        patterns=(
            re.compile(r"\\phone\{([^}]+)\}"),
            re.compile(r"\\mobile\{([^}]+)\}"),
            # needs 10+ digits so years & font sizes are never taken for a phone
            re.compile(r"((?:\+\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4})"),
            # international groupings ("+44 20 7946 0958"); the leading + keeps dates out
            re.compile(r"(\+\d{1,3}[-.\s]?\(?\d{1,4}\)?(?:[-.\s]?\d{2,4}){2,4})"),
        ),
    ),
    # "update address to 123 Main St"
    "address": FieldSpec(
        keywords=("address", "location", "city", "street"),
        patterns=(
            re.compile(r"\\address\{([^}]+)\}"),
            re.compile(r"\\location\{([^}]+)\}"),
        ),
    ),
    # "change linkedin to linkedin.com/in/user"
    "linkedin": FieldSpec(
        keywords=("linkedin", "linked in"),
        patterns=(
            re.compile(r"\\linkedin\{([^}]+)\}"),
            re.compile(r"\\href\{https?://(?:www\.)?linkedin\.com/[^}]+\}\{([^}]+)\}"),
        ),
    ),
    # "update github to github.com/user"
    "github": FieldSpec(
        keywords=("github", "git hub"),
        patterns=(
            re.compile(r"\\github\{([^}]+)\}"),
            re.compile(r"\\href\{https?://(?:www\.)?github\.com/[^}]+\}\{([^}]+)\}"),
        ),
    ),
}

# * Verbs that mark an instruction as a direct edit command
EDIT_VERBS = ("change", "update", "edit", "modify", "replace", "set")

# * "verb ... to/as VALUE" extraction pattern (VALUE stops at a trailing period)
NEW_VALUE_RE = re.compile(
    r"(?:change|update|set|make|edit).*?(?:to|as)\s+(.+?)(?:\.$|\.\s|$)",
    re.IGNORECASE,
)
VALUE_CONNECTOR_RE = re.compile(r"^(?:to|as|:)\s+", re.IGNORECASE)

# * Acceptable heading titles per logical section (matched case-insensitively)
SECTION_TITLES: dict[str, tuple[str, ...]] = {
    "summary": ("OBJECTIVE", "Professional Summary", "Summary", "Profile", "About"),
    "experience": (
        "EXPERIENCE",
        "Work Experience",
        "Employment",
        "Professional Experience",
    ),
    "education": ("Education", "EDUCATION", "Academic Background"),
    "skills": ("SKILLS", "Technical Skills", "Skills", "Expertise"),
    "projects": ("PROJECTS", "Projects", "Portfolio"),
    "certifications": ("Certifications", "CERTIFICATIONS", "Certificates"),
    "awards": ("Awards", "AWARDS", "Achievements", "Honors"),
    "publications": ("Publications", "PUBLICATIONS", "Papers"),
}

# * Section opener syntaxes; {title} is substituted w/ an escaped title variant
SECTION_MARKER_TEMPLATES: tuple[str, ...] = (
    r"\\begin\{{rSection\}}\{{{title}\}}",  # \begin{rSection}{TITLE}
    r"\\section\*?\{{{title}\}}",  # \section{TITLE} / \section*{TITLE}
    r"%+\s*{title}",  # % TITLE
)

# * Literal hard separator line used by the rSection template family
HARD_SEPARATOR = "%" * 38

# * Lines that end a section body (tested against the stripped line; first hit wins)
SECTION_TERMINATORS: tuple[Pattern[str], ...] = (
    re.compile(r"^\\end\{rSection\}"),
    re.compile(r"^\\section\*?\{"),
    re.compile(r"^\\end\{document\}"),
    re.compile(r"^%%%+"),
    re.compile(r"^\\begin\{rSection\}"),
)

# * Heading / environment titles embedded in an AI reply
EMBEDDED_TITLE_PATTERNS: tuple[Pattern[str], ...] = (
    re.compile(r"\\section\*?\{(.*?)\}", re.IGNORECASE),
    re.compile(r"\\begin\{rSection\}\{(.*?)\}", re.IGNORECASE),
)

# * Section environment wrappers the AI sometimes echoes back
RSECTION_OPEN_RE = re.compile(r"\\begin\{rSection\}\{[^}]*\}[ \t]*\n?", re.IGNORECASE)
RSECTION_CLOSE_RE = re.compile(r"\n?[ \t]*\\end\{rSection\}", re.IGNORECASE)
ITEMIZE_OPEN = "\\begin{itemize}"
ITEMIZE_CLOSE = "\\end{itemize}"

# * Markdown code fences around AI code
CODE_FENCE_RE = re.compile(r"```(?:latex|tex)?[ \t]*\n?", re.IGNORECASE)

# * Single-argument command w/ literal argument (candidate preamble field)
PREAMBLE_COMMAND_RE = re.compile(r"\\(\w+)\{[^}]*\}")

# * Commands never treated as preamble field updates
STRUCTURAL_COMMANDS = frozenset(
    {"begin", "end", "section", "subsection", "item", "textbf", "textit", "href"}
)


# * Build opener patterns for every title variant of a section, in scan order
def section_marker_patterns(section: str) -> list[Pattern[str]]:
    titles = SECTION_TITLES.get(section.lower(), (section,))
    return [
        re.compile(template.format(title=re.escape(title)), re.IGNORECASE)
        for title in titles
        for template in SECTION_MARKER_TEMPLATES
    ]


# * Check if a stripped line terminates a section body
def is_section_terminator(line: str) -> bool:
    stripped = line.strip()
    if stripped == HARD_SEPARATOR:
        return True
    return any(pattern.search(stripped) for pattern in SECTION_TERMINATORS)


# * Check if text contains required LaTeX document structure
def has_required_document_structure(text: str) -> tuple[bool, bool, bool]:
    return (
        bool(DOCUMENTCLASS_RE.search(text)),
        bool(BEGIN_DOCUMENT_RE.search(text)),
        bool(END_DOCUMENT_RE.search(text)),
    )


# * Full document = class declaration, or both body markers
def is_full_document(text: str) -> bool:
    has_class, has_begin, has_end = has_required_document_structure(text)
    return has_class or (has_begin and has_end)


__all__ = [
    "DOCUMENT_MARKERS",
    "FieldSpec",
    "FIELD_PATTERNS",
    "EDIT_VERBS",
    "NEW_VALUE_RE",
    "VALUE_CONNECTOR_RE",
    "SECTION_TITLES",
    "SECTION_MARKER_TEMPLATES",
    "HARD_SEPARATOR",
    "SECTION_TERMINATORS",
    "EMBEDDED_TITLE_PATTERNS",
    "RSECTION_OPEN_RE",
    "RSECTION_CLOSE_RE",
    "ITEMIZE_OPEN",
    "ITEMIZE_CLOSE",
    "CODE_FENCE_RE",
    "PREAMBLE_COMMAND_RE",
    "STRUCTURAL_COMMANDS",
    "section_marker_patterns",
    "is_section_terminator",
    "has_required_document_structure",
    "is_full_document",
]
