# src/ui/reporting.py
# Rich rendering of merge results, session outcomes, locator matches & diffs for the CLI

from __future__ import annotations

import difflib
from pathlib import Path

from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ..core.constants import OutcomeKind
from ..core.types import (
    EditOutcome,
    FieldLookup,
    SectionBoundary,
    SessionOutcome,
    UpdateResult,
    split_lines,
)
from ..quill_io.compiler import CompileResult
from ..quill_io.console import console

CHECKMARK = "[green]✓[/]"
ARROW = "[dim]→[/]"

# lines of section content shown by `quill locate`
SECTION_PREVIEW_LINES = 8


def print_success_line(label: str, path: str | Path | None = None) -> None:
    if path is not None:
        console.print(CHECKMARK, label, ARROW, f"{path}")
    else:
        console.print(CHECKMARK, label)


def print_warning(warning: str | None) -> None:
    if warning:
        console.print(f"[yellow]Warning:[/] {escape(warning)}")


# * Unified diff between two document revisions as a highlighted block
def render_diff(before: str, after: str, label: str = "resume.tex") -> None:
    diff = list(
        difflib.unified_diff(
            split_lines(before),
            split_lines(after),
            fromfile=f"a/{label}",
            tofile=f"b/{label}",
            lineterm="",
        )
    )
    if not diff:
        console.print("[dim]No changes[/]")
        return
    console.print(Syntax("\n".join(diff), "diff", theme="ansi_dark", word_wrap=True))


# * Summary of a resolved patch: strategy, target section & warning
def report_update(result: UpdateResult, path: Path | None = None) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column(style="bold cyan")
    table.add_column()
    table.add_row("Update", result.update_type.value)
    table.add_row("Section", escape(result.section) if result.section else "[dim]-[/]")
    console.print(table)
    print_warning(result.warning)
    if path is not None:
        print_success_line("Wrote resume", path)


def report_edit(outcome: EditOutcome, path: Path | None = None) -> None:
    if not outcome.success:
        console.print(f"[red]Edit failed:[/] {escape(outcome.error or 'unknown error')}")
        return
    console.print(
        CHECKMARK,
        f"Updated [bold]{escape(outcome.field or '')}[/]:",
        f"[dim]{escape(outcome.old_value or '')}[/]",
        ARROW,
        f"[green]{escape(outcome.new_value or '')}[/]",
    )
    if path is not None:
        print_success_line("Wrote resume", path)


# * Render one chat turn's outcome
def report_outcome(outcome: SessionOutcome) -> None:
    kind = outcome.kind
    if kind is OutcomeKind.CANCELLED:
        console.print(f"[yellow]{escape(outcome.message or 'Request cancelled')}[/]")
        return
    if kind is OutcomeKind.ERROR:
        console.print(f"[red]Error:[/] {escape(outcome.error or 'unknown error')}")
        return
    if kind is OutcomeKind.EDIT:
        console.print(CHECKMARK, escape(outcome.message or ""))
        return

    if outcome.message:
        console.print(Panel(escape(outcome.message), title="Assistant", border_style="cyan"))
    if kind is OutcomeKind.PATCH and outcome.update is not None:
        report_update(outcome.update)
    else:
        print_warning(outcome.warning)
    if outcome.conversation_id:
        console.print(
            f"[dim]Conversation id: {outcome.conversation_id} "
            f"(rate it w/ 'quill rate {outcome.conversation_id} 5')[/]"
        )


def report_boundary(boundary: SectionBoundary, section: str) -> None:
    header = boundary.section_header or "[dim](no header line)[/]"
    console.print(f"[bold]{escape(section)}[/] {ARROW} lines {boundary.start + 1}-{boundary.end}")
    console.print(f"  Header: {escape(header) if boundary.section_header else header}")
    console.print(f"  Content starts at line {boundary.content_start + 1}")
    preview = boundary.section_content[:SECTION_PREVIEW_LINES]
    if preview:
        console.print(Syntax("\n".join(preview), "latex", theme="ansi_dark", word_wrap=True))
    hidden = len(boundary.section_content) - len(preview)
    if hidden > 0:
        console.print(f"[dim]  ... {hidden} more line(s)[/]")


def report_field(lookup: FieldLookup) -> None:
    if not lookup.found or lookup.match is None:
        console.print(f"[yellow]No field found:[/] {escape(lookup.reason or '')}")
        return
    match = lookup.match
    console.print(f"[bold]{escape(match.field)}[/] {ARROW} chars {match.position.start}-{match.position.end}")
    console.print(f"  Current: {escape(match.old_value)}")
    console.print(f"  New: {escape(match.new_value) if match.new_value else '[dim](none in instruction)[/]'}")


def report_compile(result: CompileResult, path: Path) -> None:
    print_success_line(f"Compiled PDF ({len(result.pdf_bytes):,} bytes)", path)
    for warning in result.warnings or []:
        print_warning(warning)


# * Table of stored exchanges (newest first)
def report_history(records: list) -> None:
    if not records:
        console.print("[dim]No conversations recorded yet[/]")
        return
    table = Table(show_lines=False)
    table.add_column("Id", style="cyan", no_wrap=True)
    table.add_column("When", style="dim", no_wrap=True)
    table.add_column("Instruction")
    table.add_column("Rating", justify="right")
    for record in records:
        helpful = {True: " 👍", False: " 👎"}.get(record.was_helpful, "")
        rating = f"{record.rating}{helpful}" if record.rating or helpful else "[dim]-[/]"
        table.add_row(
            record.conversation_id,
            record.timestamp[:19].replace("T", " "),
            escape(record.user_message[:60]),
            rating,
        )
    console.print(table)
