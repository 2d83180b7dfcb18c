# src/cli/app.py
# Root Typer application & command registration
#
# ! Command imports at bottom of file are deferred to avoid circular dependencies.

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

# load environment variables once at startup
load_dotenv()

from ..config.settings import settings_manager
from ..quill_io.console import console


app = typer.Typer(
    rich_markup_mode="rich",
    add_completion=False,
    no_args_is_help=False,
    context_settings={"help_option_names": ["--help", "-h"]},
    help="Chat-driven editing for LaTeX résumés",
)


# * Load settings & configure verbose output for every invocation
@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging for debugging"
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", help="Write verbose logs to file (enables verbose mode)"
    ),
) -> None:
    # provider availability is re-checked once per CLI invocation
    from ..ai.cache import AICache

    AICache.invalidate_all()

    # respect injected ctx.obj from tests/embedding; only load if absent
    if getattr(ctx, "obj", None) is None:
        ctx.obj = settings_manager.load()

    # must be after settings load to check dev_mode
    from ..core.verbose import init_verbose

    # log_file implies verbose mode
    verbose_enabled = verbose or log_file is not None
    dev_mode = ctx.obj.dev_mode if hasattr(ctx.obj, "dev_mode") else False
    init_verbose(enabled=verbose_enabled, log_file=log_file, dev_mode=dev_mode)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        ctx.exit()


# ! import command modules here to avoid circular import w/ app object
from .commands import chat as _chat  # noqa: F401
from .commands import edit as _edit  # noqa: F401
from .commands import merge as _merge  # noqa: F401
from .commands import locate as _locate  # noqa: F401
from .commands import compile as _compile  # noqa: F401
from .commands import extract as _extract  # noqa: F401
from .commands import history as _history  # noqa: F401
from .commands import config as _config  # noqa: F401
from .commands import models as _models  # noqa: F401
from .commands import assist as _assist  # noqa: F401
