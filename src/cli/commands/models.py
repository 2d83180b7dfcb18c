# src/cli/commands/models.py
# Models command: list chat models by provider w/ credential & Ollama availability

from __future__ import annotations

import typer
from rich.markup import escape

from ...ai.clients.ollama_client import check_ollama_status
from ...ai.models import get_model_description, list_models
from ...config.env_validator import get_required_env_var, validate_provider_env
from ...quill_io.console import console
from ...ui.reporting import CHECKMARK
from ..app import app

CROSS = "[red]✗[/]"

# * Sub-app for models commands; registered on root app
models_app = typer.Typer(rich_markup_mode="rich", help="[cyan]List available chat models by provider[/]")
app.add_typer(models_app, name="models")


@models_app.callback(invoke_without_command=True)
def models_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _show_models_list()


# * explicit list command (same as default callback)
@models_app.command(name="list")
def list_cmd() -> None:
    _show_models_list()


def _show_hosted(provider: str) -> None:
    available = validate_provider_env(provider)
    status = "[green]Available[/]" if available else f"[dim]Requires {get_required_env_var(provider)}[/]"
    console.print(f"[bold white]{provider.upper()}[/] {CHECKMARK if available else CROSS} {status}")
    for model in list_models(provider):
        style = "cyan" if available else "dim"
        console.print(f"  • [{style}]{model}[/] [dim]{get_model_description(model)}[/]")
    console.print()


def _show_models_list() -> None:
    console.print()
    console.print("[bold cyan]Available Chat Models[/]")
    console.print()

    _show_hosted("openai")
    _show_hosted("anthropic")

    status = check_ollama_status()
    if status.available and status.models:
        console.print(f"[bold white]OLLAMA[/] {CHECKMARK} [green]Available[/]")
        for model in status.models:
            console.print(f"  • [cyan]{model}[/]")
    else:
        console.print(f"[bold white]OLLAMA[/] {CROSS} [dim]{escape(status.error or 'No local models installed')}[/]")
    console.print()

    console.print("[dim]Use a model with:[/] [cyan]quill chat RESUME \"...\" --model MODEL_NAME[/]")
    console.print("[dim]Set default model with:[/] [cyan]quill config set model MODEL_NAME[/]")
