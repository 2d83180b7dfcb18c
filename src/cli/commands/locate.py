# src/cli/commands/locate.py
# Locate command: show where a section or a field edit would land

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...core.field_locator import locate_field
from ...core.section_locator import find_section_boundaries
from ...quill_io.console import console
from ...quill_io.documents import read_latex
from ...ui.reporting import report_boundary, report_field
from ..app import app
from ..decorators import handle_quill_error
from ..params import ResumeArg


# * Show the line range of a section or the span targeted by a field edit command
@app.command(help="Show the line range of a section or the span of a field edit")
@handle_quill_error
def locate(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    section: Optional[str] = typer.Option(
        None, "--section", "-s", help="Section name, e.g. 'experience' or 'technical skills'"
    ),
    field: Optional[str] = typer.Option(
        None, "--field", "-f", help="Field edit command, e.g. 'change my phone to 555-0100'"
    ),
) -> None:
    if (section is None) == (field is None):
        raise typer.BadParameter("Pass exactly one of --section or --field")

    document = read_latex(resume, allow_fragment=True)

    if section is not None:
        boundary = find_section_boundaries(document, section)
        if boundary is None:
            console.print(f"[yellow]Section not found:[/] {section}")
            raise typer.Exit(1)
        report_boundary(boundary, section)
        return

    lookup = locate_field(document, field or "")
    report_field(lookup)
    if not lookup.found:
        raise typer.Exit(1)
