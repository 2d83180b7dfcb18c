# src/quill_io/documents.py
# Résumé file I/O & text extraction from uploaded PDF, DOCX & plain-text files

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from docx import Document
from pypdf import PdfReader

from .generics import read_text_safe, write_text_safe
from .latex_patterns import is_full_document
from ..core.exceptions import DocumentParseError, FileReadError, LaTeXError, UnsupportedFormatError
from ..core.output import LogCategory
from ..core.verbose import vlog

TEXT_EXTENSIONS = (".tex", ".latex", ".txt")
DOCX_EXTENSIONS = (".docx",)
PDF_EXTENSIONS = (".pdf",)
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS + DOCX_EXTENSIONS + TEXT_EXTENSIONS


# * Result of extracting text from an uploaded file
@dataclass(slots=True)
class ExtractResult:
    success: bool
    text: str = ""
    error: str = ""
    pages: int | None = None  # PDFs only
    format: str = ""


# * Read a LaTeX résumé; rejects files w/o document structure unless allow_fragment
def read_latex(path: Path, allow_fragment: bool = False) -> str:
    try:
        text = read_text_safe(path)
    except FileReadError as e:
        raise LaTeXError(f"Cannot read LaTeX file {path}: {e}") from e

    if not allow_fragment and not is_full_document(text):
        raise LaTeXError(
            f"{path} is not a complete LaTeX document "
            "(missing \\documentclass or \\begin{document}/\\end{document})"
        )
    return text


def write_latex(text: str, path: Path) -> None:
    write_text_safe(text, path)


def _extract_pdf(path: Path) -> ExtractResult:
    try:
        reader = PdfReader(str(path))
        text = "\n".join(page.extract_text() or "" for page in reader.pages)
        return ExtractResult(success=True, text=text, pages=len(reader.pages), format="pdf")
    except Exception as e:
        return ExtractResult(success=False, error=f"Failed to parse PDF file: {e}", format="pdf")


# paragraphs plus table cell text, in document order per container
def _extract_docx(path: Path) -> ExtractResult:
    try:
        doc = Document(str(path))
    except Exception as e:
        return ExtractResult(success=False, error=f"Failed to parse DOCX file: {e}", format="docx")

    parts = [p.text for p in doc.paragraphs]
    for table in doc.tables:
        for row in table.rows:
            parts.append("\t".join(cell.text for cell in row.cells))
    return ExtractResult(success=True, text="\n".join(parts), format="docx")


def _extract_plain(path: Path) -> ExtractResult:
    try:
        return ExtractResult(success=True, text=read_text_safe(path), format="text")
    except FileReadError as e:
        return ExtractResult(success=False, error=f"Failed to read text file: {e}", format="text")


# * Extract text from a supported file; failures come back as ExtractResult(success=False)
def extract_text(path: Path) -> ExtractResult:
    path = Path(path)
    if not path.exists() or not path.is_file():
        return ExtractResult(success=False, error=f"File not found or not accessible: {path}")
    if path.stat().st_size == 0:
        return ExtractResult(success=False, error="File is empty")

    suffix = path.suffix.lower()
    if suffix in PDF_EXTENSIONS:
        result = _extract_pdf(path)
    elif suffix in DOCX_EXTENSIONS:
        result = _extract_docx(path)
    elif suffix in TEXT_EXTENSIONS:
        result = _extract_plain(path)
    else:
        kind = suffix.lstrip(".") or "(none)"
        return ExtractResult(
            success=False,
            error=f"Unsupported file type: {kind}. Supported types: PDF, DOCX, TEX, TXT",
        )

    if result.success:
        vlog(LogCategory.FILE, f"Extracted {len(result.text):,} chars from {path.name}", result.format)
    return result


# * Extract text or raise (for callers that treat extraction failure as fatal)
def extract_text_or_raise(path: Path) -> str:
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_EXTENSIONS:
        kind = suffix.lstrip(".") or "(none)"
        raise UnsupportedFormatError(f"Cannot attach {path.name}: unsupported file type {kind}", format=kind)
    result = extract_text(path)
    if not result.success:
        raise DocumentParseError(result.error)
    return result.text
