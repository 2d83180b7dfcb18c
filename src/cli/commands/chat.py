# src/cli/commands/chat.py
# Chat command: one instruction through the session (field fast path, then the model, then merge)

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from ...ai.models import resolve_model_alias
from ...ai.provider_validator import get_model_error_message, validate_model
from ...ai.types import Attachment
from ...config.settings import get_settings
from ...core.constants import OutcomeKind
from ...core.exceptions import ConfigurationError, QuillError
from ...core.session import CancelToken, EditorSession
from ...quill_io.compiler import compile_to_file
from ...quill_io.console import console
from ...quill_io.documents import extract_text_or_raise, read_latex, write_latex
from ...quill_io.history import HistoryStore
from ...ui.reporting import print_success_line, render_diff, report_compile, report_outcome
from ..app import app
from ..decorators import handle_quill_error
from ..params import (
    AttachOpt,
    DryRunOpt,
    InstructionArg,
    ModelOpt,
    OutputOpt,
    ResumeArg,
)


def _load_attachments(paths: list[Path]) -> list[Attachment]:
    return [Attachment(name=p.name, content=extract_text_or_raise(p)) for p in paths]


# * Send one chat instruction & merge the reply into the resume
@app.command(help="Send one chat instruction & merge the reply into the resume")
@handle_quill_error
def chat(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    instruction: str = InstructionArg(),
    model: Optional[str] = ModelOpt(),
    attach: Optional[List[Path]] = AttachOpt(),
    dry_run: bool = DryRunOpt(),
    compile_pdf: bool = typer.Option(
        False, "--compile", help="Compile the updated resume to PDF next to the output"
    ),
    out: Optional[Path] = OutputOpt(),
) -> None:
    settings = get_settings(ctx)
    document = read_latex(resume)
    attachments = _load_attachments(attach or [])

    chosen = resolve_model_alias(model or settings.model)
    valid, status = validate_model(chosen)
    if not valid:
        raise ConfigurationError(get_model_error_message(chosen, status))

    history = HistoryStore(settings.history_file) if settings.history_enabled else None
    session = EditorSession(document, model=chosen, settings=settings, history=history)

    cancel = CancelToken()
    with session:
        try:
            with console.status(f"[cyan]Asking {chosen}...[/]"):
                outcome = session.handle(
                    instruction, cancel=cancel, attachments=attachments, apply=not dry_run
                )
        except KeyboardInterrupt:
            cancel.cancel()
            console.print("[yellow]Request cancelled[/]")
            raise typer.Exit(130)

        if outcome.kind is OutcomeKind.ERROR:
            raise QuillError(outcome.error or "Chat request failed")
        report_outcome(outcome)
        if outcome.kind not in (OutcomeKind.EDIT, OutcomeKind.PATCH):
            return

        if dry_run:
            if outcome.update is not None:
                render_diff(document, outcome.update.document, resume.name)
            return

        target = out or resume
        write_latex(session.document, target)
        print_success_line("Wrote resume", target)

        if compile_pdf:
            pdf_path = target.with_suffix(".pdf")
            with console.status(f"[cyan]Compiling w/ {settings.compiler}...[/]"):
                result = compile_to_file(
                    session.document,
                    pdf_path,
                    compiler=settings.compiler,
                    timeout=settings.compile_timeout,
                )
            report_compile(result, pdf_path)
