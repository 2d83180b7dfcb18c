# src/core/constants.py
# Constants & enums for patch resolution, field edits & session outcomes

from enum import Enum


# * How a chat reply was merged into the document
class UpdateType(Enum):
    FULL = "full"
    PREAMBLE = "preamble"
    SECTION = "section"
    SMART = "smart"


# * Phases of an animated field edit
class EditPhase(Enum):
    IDLE = "idle"
    DELETING = "deleting"
    INSERTING = "inserting"
    DONE = "done"


# * What a session turn ended up doing
class OutcomeKind(Enum):
    EDIT = "edit"  # field fast path applied
    PATCH = "patch"  # LLM reply merged into document
    REPLY = "reply"  # chat-only reply, nothing to merge
    CANCELLED = "cancelled"
    ERROR = "error"


# * Scalar header fields supported by the field locator
FIELD_NAMES = ("name", "email", "phone", "address", "linkedin", "github")

# * Logical section names supported by the section locator
SECTION_NAMES = (
    "summary",
    "experience",
    "education",
    "skills",
    "projects",
    "certifications",
    "awards",
    "publications",
)

# fragments shorter than this replace a single matching line in smart merge
SMART_MERGE_MAX_LINES = 5

# search terms must be longer than this
MIN_SEARCH_TERM_LENGTH = 3

# * Warning attached when a fragment is taken as the whole document
LOW_CONFIDENCE_WARNING = (
    "Could not place the AI reply in a specific section; "
    "the reply replaced the whole document. Review the result before compiling."
)

# unresolved command messages
NO_FIELD_REASON = "Could not identify what to edit"
NO_VALUE_ERROR = "Could not extract new value from command"
EDITOR_BUSY_ERROR = "Editor is busy with another edit; try again when it finishes"
