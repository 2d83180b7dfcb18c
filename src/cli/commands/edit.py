# src/cli/commands/edit.py
# Edit command: field fast path only, animated in the terminal (no model call)

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from ...config.settings import get_settings
from ...core.edit_executor import AnimationOptions, EditExecutor, TextBuffer
from ...core.exceptions import EditError
from ...quill_io.console import console, get_console
from ...quill_io.documents import read_latex, write_latex
from ...ui.live_buffer import LiveBuffer
from ...ui.reporting import print_success_line, report_edit
from ..app import app
from ..decorators import handle_quill_error
from ..params import InstructionArg, OutputOpt, ResumeArg


# * Apply a field edit command ("change my email to ...") directly to the resume
@app.command(help="Apply a field edit command directly to the resume (no AI call)")
@handle_quill_error
def edit(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    instruction: str = InstructionArg(),
    animate: bool = typer.Option(
        True, "--animate/--no-animate", help="Show the edit as a live delete-then-type animation"
    ),
    speed: Optional[float] = typer.Option(
        None, "--speed", min=0.0, help="Seconds per character; defaults to config animation_speed"
    ),
    out: Optional[Path] = OutputOpt(),
) -> None:
    settings = get_settings(ctx)
    document = read_latex(resume)

    if animate:
        options = AnimationOptions.from_settings(settings)
        if speed is not None:
            options.speed = speed
        buffer: TextBuffer = LiveBuffer(document, console=get_console(), title=resume.name)
    else:
        options = AnimationOptions.instant()
        buffer = TextBuffer(document)

    executor = EditExecutor(buffer)
    target = out or resume
    try:
        if isinstance(buffer, LiveBuffer):
            with buffer:
                outcome = executor.execute_edit_command(instruction, options)
        else:
            outcome = executor.execute_edit_command(instruction, options)
    except KeyboardInterrupt:
        # an interrupted animation leaves the buffer fully edited
        if buffer.text() != document:
            write_latex(buffer.text(), target)
            console.print("[yellow]Animation interrupted; edit applied[/]")
            print_success_line("Wrote resume", target)
        raise typer.Exit(130)

    if not outcome.success:
        raise EditError(outcome.error or "Edit failed")

    write_latex(buffer.text(), target)
    report_edit(outcome, target)
