# src/cli/commands/history.py
# Conversation history commands: rate a reply, list recent exchanges & show stats

from __future__ import annotations

from typing import Optional

import typer

from ...config.settings import get_settings
from ...core.exceptions import HistoryError
from ...quill_io.console import console
from ...quill_io.history import MAX_RATING, MIN_RATING, HistoryStore
from ...ui.reporting import print_success_line, report_history
from ..app import app
from ..decorators import handle_quill_error


def _store(ctx: typer.Context) -> HistoryStore:
    settings = get_settings(ctx)
    if not settings.history_enabled:
        raise HistoryError("History is disabled. Enable with: quill config set history_enabled true")
    return HistoryStore(settings.history_file)


# * Rate a past reply; highly rated replies are reused as examples in later prompts
@app.command(help="Rate a past reply (0-5); good replies become prompt examples")
@handle_quill_error
def rate(
    ctx: typer.Context,
    conversation_id: str = typer.Argument(..., help="Id printed after a chat reply"),
    rating: int = typer.Argument(..., min=MIN_RATING, max=MAX_RATING, help="Rating 0-5"),
    helpful: Optional[bool] = typer.Option(
        None, "--helpful/--not-helpful", help="Mark the reply helpful or not"
    ),
) -> None:
    _store(ctx).rate(conversation_id, rating, helpful)
    print_success_line(f"Rated {conversation_id}", str(rating))


# * List recent exchanges (optionally filtered) or show aggregate stats
@app.command(help="List recent conversations or show history stats")
@handle_quill_error
def history(
    ctx: typer.Context,
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Rows to show"),
    search: Optional[str] = typer.Option(None, "--search", "-q", help="Filter by text in either side"),
    stats: bool = typer.Option(False, "--stats", help="Show aggregate statistics"),
) -> None:
    store = _store(ctx)

    if stats:
        for key, value in store.stats().items():
            console.print(f"[bold cyan]{key}[/]: {value}")
        return

    records = store.search(search, limit) if search else store.latest(limit)
    report_history(records)
