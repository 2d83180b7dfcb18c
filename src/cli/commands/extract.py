# src/cli/commands/extract.py
# Extract command: print the plain text of a PDF, DOCX, TEX or TXT file

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...core.exceptions import ExtractionError
from ...quill_io.console import console
from ...quill_io.documents import extract_text
from ...quill_io.generics import write_text_safe
from ...ui.reporting import print_success_line
from ..app import app
from ..decorators import handle_quill_error
from ..params import InputFileArg, OutputOpt


# * Extract text from an uploaded file (what the chat sees as an attachment)
@app.command(help="Print the text extracted from a PDF, DOCX, TEX or TXT file")
@handle_quill_error
def extract(
    ctx: typer.Context,
    file: Path = InputFileArg(),
    out: Optional[Path] = OutputOpt(),
) -> None:
    result = extract_text(file)
    if not result.success:
        raise ExtractionError(result.error)

    if out is not None:
        write_text_safe(result.text, out)
        print_success_line(f"Extracted {len(result.text):,} chars", out)
        return

    # plain print; extracted text may contain [brackets] rich would read as markup
    console.print(result.text, markup=False, highlight=False)
    if result.pages is not None:
        console.print(f"[dim]{result.pages} page(s)[/]")
