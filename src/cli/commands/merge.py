# src/cli/commands/merge.py
# Merge command: resolve a saved model reply against the resume offline

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...core.patch_resolver import resolve_patch
from ...quill_io.documents import read_latex, write_latex
from ...quill_io.generics import read_text_safe
from ...ui.reporting import render_diff, report_update
from ..app import app
from ..decorators import handle_quill_error
from ..params import DryRunOpt, InstructionArg, OutputOpt, ResumeArg


# * Merge a saved model reply into the resume
@app.command(help="Merge a saved model reply (LaTeX or fenced markdown) into the resume")
@handle_quill_error
def merge(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    reply_file: Path = typer.Argument(
        ...,
        help="File holding the model reply",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    ),
    instruction: str = InstructionArg(),
    dry_run: bool = DryRunOpt(),
    out: Optional[Path] = OutputOpt(),
) -> None:
    document = read_latex(resume)
    reply = read_text_safe(reply_file)

    result = resolve_patch(document, reply, instruction)
    if dry_run:
        report_update(result)
        render_diff(document, result.document, resume.name)
        return

    target = out or resume
    write_latex(result.document, target)
    report_update(result, target)
