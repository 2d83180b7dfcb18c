# src/cli/params.py
# CLI argument & option definitions shared by Quill commands

from __future__ import annotations

from typing import Any

import typer

from ..config.settings import VALID_COMPILERS


def _normalize_compiler(value: str | None) -> str | None:
    if value is None:
        return None
    v = value.strip().lower()
    if v not in VALID_COMPILERS:
        raise typer.BadParameter(f"Invalid compiler. Choose: {'|'.join(VALID_COMPILERS)}")
    return v


def ResumeArg() -> Any:
    return typer.Argument(
        ...,
        help="Path to LaTeX resume (.tex)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    )


def InstructionArg() -> Any:
    return typer.Argument(
        ...,
        help="Natural-language instruction, e.g. 'change my email to jane@doe.com'",
    )


def InputFileArg() -> Any:
    return typer.Argument(
        ...,
        help="Path to a PDF, DOCX, TEX or TXT file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    )


def ModelOpt() -> Any:
    return typer.Option(
        None,
        "--model",
        "-m",
        help="Chat model (see 'quill models'); defaults to config",
    )


def AttachOpt() -> Any:
    return typer.Option(
        None,
        "--attach",
        "-a",
        help="File whose text is added to the chat context (repeatable)",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
    )


def OutputOpt() -> Any:
    return typer.Option(
        None,
        "--out",
        "-o",
        help="Write the result here instead of overwriting the input",
        resolve_path=True,
    )


def DryRunOpt() -> Any:
    return typer.Option(
        False,
        "--dry-run",
        help="Show the resulting diff without writing any file",
    )


def CompilerOpt() -> Any:
    return typer.Option(
        None,
        "--compiler",
        "-c",
        callback=_normalize_compiler,
        help=f"LaTeX compiler: {'|'.join(VALID_COMPILERS)}; defaults to config",
    )


def ConfigKeyArg() -> Any:
    return typer.Argument(
        help="Configuration setting name",
    )


def ConfigValueArg() -> Any:
    return typer.Argument(
        help="New value to assign to the setting",
    )


def JobOpt(required: bool = False) -> Any:
    return typer.Option(
        ... if required else None,
        "--job",
        "-j",
        help="Target job description: a PDF, DOCX, TEX or TXT file, or the text itself",
    )
