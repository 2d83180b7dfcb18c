# src/quill_io/__init__.py
# Package exports for Quill I/O: pattern tables, files, extraction, compiler & history

from .generics import (
    write_json_safe,
    read_json_safe,
    ensure_parent,
)
from .shared_patterns import (
    SECTION_KEYWORDS,
    infer_section_kind,
)
from .documents import (
    ExtractResult,
    extract_text,
    read_latex,
    write_latex,
)
from .compiler import CompileResult, compile_latex, check_compiler
from .history import HistoryRecord, HistoryStore

__all__ = [
    # Generics
    "write_json_safe",
    "read_json_safe",
    "ensure_parent",
    # Shared pattern utilities
    "SECTION_KEYWORDS",
    "infer_section_kind",
    # Documents & extraction
    "ExtractResult",
    "extract_text",
    "read_latex",
    "write_latex",
    # Compiler
    "CompileResult",
    "compile_latex",
    "check_compiler",
    # History store
    "HistoryRecord",
    "HistoryStore",
]
