# src/cli/commands/assist.py
# One-shot assistant commands: improvements, bullet rewrites, summary, quality score & job keywords

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.panel import Panel

from ... import ai
from ...ai.models import resolve_model_alias
from ...ai.prompts import (
    build_bullet_prompt,
    build_improvements_prompt,
    build_keywords_prompt,
    build_quality_prompt,
    build_summary_prompt,
)
from ...ai.provider_validator import get_model_error_message, validate_model
from ...config.settings import get_settings
from ...core.exceptions import AIError, ConfigurationError
from ...quill_io.console import console
from ...quill_io.documents import extract_text_or_raise, read_latex
from ..app import app
from ..decorators import handle_quill_error
from ..params import JobOpt, ModelOpt, ResumeArg


# --job accepts a file to extract or the description text itself
def _job_text(job: str | None) -> str:
    if not job:
        return ""
    # os.path.isfile is False (not an error) for text too long to be a file name
    candidate = os.path.expanduser(job)
    if os.path.isfile(candidate):
        return extract_text_or_raise(Path(candidate))
    return job


# * Send a single prompt (no chat history) & print the reply in a panel
def _ask(ctx: typer.Context, prompt: str, model: str | None, title: str) -> str:
    settings = get_settings(ctx)
    chosen = resolve_model_alias(model or settings.model)
    valid, status = validate_model(chosen)
    if not valid:
        raise ConfigurationError(get_model_error_message(chosen, status))

    with console.status(f"[cyan]Asking {chosen}...[/]"):
        result = ai.run_chat([{"role": "user", "content": prompt}], chosen, settings.temperature)
    if not result.success:
        raise AIError(result.error or f"{title} request failed")

    console.print(Panel(escape(result.text), title=title, border_style="cyan"))
    return result.text


@app.command(help="Suggest 3-5 concrete improvements, optionally for a target job")
@handle_quill_error
def improve(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    job: Optional[str] = JobOpt(),
    model: Optional[str] = ModelOpt(),
) -> None:
    prompt = build_improvements_prompt(read_latex(resume), _job_text(job))
    _ask(ctx, prompt, model, "Suggested improvements")


@app.command(help="Rewrite one bullet point w/ stronger verbs & quantified results")
@handle_quill_error
def bullet(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="The bullet point to improve"),
    job: Optional[str] = JobOpt(),
    model: Optional[str] = ModelOpt(),
) -> None:
    _ask(ctx, build_bullet_prompt(text, _job_text(job)), model, "Bullet options")


@app.command(help="Draft a 2-3 sentence professional summary")
@handle_quill_error
def summary(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    job: Optional[str] = JobOpt(),
    model: Optional[str] = ModelOpt(),
) -> None:
    prompt = build_summary_prompt(read_latex(resume), _job_text(job))
    _ask(ctx, prompt, model, "Professional summary")


@app.command(help="Score clarity, impact, ATS compatibility & formatting (1-10)")
@handle_quill_error
def score(
    ctx: typer.Context,
    resume: Path = ResumeArg(),
    model: Optional[str] = ModelOpt(),
) -> None:
    _ask(ctx, build_quality_prompt(read_latex(resume)), model, "Quality review")


@app.command(help="Extract the 10 most important keywords from a job description")
@handle_quill_error
def keywords(
    ctx: typer.Context,
    job: str = JobOpt(required=True),
    model: Optional[str] = ModelOpt(),
) -> None:
    _ask(ctx, build_keywords_prompt(_job_text(job)), model, "Job keywords")
