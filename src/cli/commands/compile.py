# src/cli/commands/compile.py
# Compile command: render the resume to PDF w/ tectonic or a TeX engine

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...config.settings import get_settings
from ...core.exceptions import LaTeXError
from ...quill_io.compiler import check_compiler, compile_to_file
from ...quill_io.console import console
from ...quill_io.documents import read_latex
from ...ui.reporting import print_success_line, report_compile
from ..app import app
from ..decorators import handle_quill_error
from ..params import CompilerOpt, OutputOpt, ResumeArg


# * Compile a LaTeX resume to PDF
@app.command(name="compile", help="Compile a LaTeX resume to PDF")
@handle_quill_error
def compile_cmd(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    compiler: Optional[str] = CompilerOpt(),
    out: Optional[Path] = OutputOpt(),
    check: bool = typer.Option(
        False, "--check", help="Only report whether the compiler is installed"
    ),
) -> None:
    settings = get_settings(ctx)
    engine = compiler or settings.compiler

    if check:
        installed, info = check_compiler(engine)
        if not installed:
            raise LaTeXError(info)
        print_success_line(f"{engine} found", info)
        return

    document = read_latex(resume)
    pdf_path = out or resume.with_suffix(".pdf")
    with console.status(f"[cyan]Compiling w/ {engine}...[/]"):
        result = compile_to_file(document, pdf_path, compiler=engine, timeout=settings.compile_timeout)
    report_compile(result, pdf_path)
