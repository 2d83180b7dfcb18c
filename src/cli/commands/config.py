# src/cli/commands/config.py
# Settings mgmt subcommands for Quill CLI (list/get/set/reset/path) w/ JSON-backed storage

from __future__ import annotations

import json
from dataclasses import fields

import typer
from rich.markup import escape

from ...config.settings import QuillSettings, coerce_setting_value, settings_manager
from ...quill_io.console import console
from ...ui.reporting import CHECKMARK, print_success_line
from ..app import app
from ..params import ConfigKeyArg, ConfigValueArg

# * Sub-app for config commands; registered on root app
config_app = typer.Typer(rich_markup_mode="rich", help="[cyan]Manage Quill settings[/]")
app.add_typer(config_app, name="config")


# concise set of known keys for validation
def _known_keys() -> set[str]:
    return {f.name for f in fields(QuillSettings)}


# * Print current settings & config path
def _print_current_settings() -> None:
    data = settings_manager.list_settings()

    console.print()
    console.print("[bold cyan]Current Configuration[/]")
    console.print(f"[dim]Config file: {settings_manager.config_path}[/]")
    console.print()

    for key, value in data.items():
        console.print(f"  [bold]{key}[/]: [cyan]{json.dumps(value)}[/]")

    console.print()
    console.print("[dim]Use [/][cyan]quill config --help[/][dim] to see available commands[/]")


@config_app.callback(invoke_without_command=True)
def config_callback(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        _print_current_settings()


# * Get a specific setting value & print as JSON
@config_app.command()
def get(key: str = ConfigKeyArg()) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")
    value = settings_manager.get(key)
    # print JSON for consistency (strings quoted)
    console.print(f"[cyan]{json.dumps(value)}[/]")


# * Set a specific setting value; the string is coerced to the setting's type & validated
@config_app.command(name="set")
def set_cmd(key: str = ConfigKeyArg(), value: str = ConfigValueArg()) -> None:
    if key not in _known_keys():
        raise typer.BadParameter(f"Unknown setting: {key}")

    try:
        coerced = coerce_setting_value(key, value)
        settings_manager.set(key, coerced)
    except ValueError as e:
        raise typer.BadParameter(str(e))
    print_success_line(f"Set {key}", f"[cyan]{json.dumps(coerced)}[/]")


# * Reset all settings to defaults
@config_app.command()
def reset() -> None:
    settings_manager.reset()
    console.print(CHECKMARK, "Reset settings to defaults")


# * Show the configuration file path
@config_app.command()
def path() -> None:
    # one unwrapped line so the output can be used as a path
    console.print(f"[path]{escape(str(settings_manager.config_path))}[/]", soft_wrap=True)


# * Explicit 'list' command to show current settings
@config_app.command(name="list")
def list_cmd() -> None:
    _print_current_settings()
