# src/config/settings.py
# Configuration management for Quill: chat model, merge/animation pacing, compiler & history store

from pathlib import Path
from typing import Dict, Any, Optional, cast
import typer
from dataclasses import dataclass, asdict, fields

from ..quill_io.generics import read_json_safe, write_json_safe
from ..core.exceptions import JSONParsingError

VALID_COMPILERS = ("tectonic", "pdflatex", "xelatex", "lualatex")


# * Settings dataclass for Quill w/ chat, animation, compiler & history configuration
@dataclass
class QuillSettings:
    # chat model setting
    model: str = "gpt-5-mini"
    # temp setting (note: GPT-5 models don't support temperature parameter)
    temperature: float = 0.7
    # chat turns sent w/ each request (system prompt always included)
    max_context_turns: int = 10

    # per-session response cache
    cache_enabled: bool = True
    cache_ttl_seconds: int = 300
    cache_max_entries: int = 50

    # animated field edits (seconds)
    animation_speed: float = 0.03
    highlight_duration: float = 1.5
    scroll_delay: float = 0.3

    # PDF compiler
    compiler: str = "tectonic"
    compile_timeout: int = 60

    # conversation history & ratings
    history_path: str = ".quill/history.jsonl"
    history_enabled: bool = True

    # dev mode setting (enables debug output w/ --verbose)
    dev_mode: bool = False

    def __post_init__(self) -> None:
        # Temperature validation (OpenAI/Anthropic range: 0.0-2.0)
        if isinstance(self.temperature, bool) or not isinstance(self.temperature, (int, float)):
            raise ValueError(
                f"temperature must be a number, got {type(self.temperature).__name__}"
            )
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"temperature must be 0.0-2.0, got {self.temperature}")

        if not isinstance(self.max_context_turns, int) or self.max_context_turns < 1:
            raise ValueError(
                f"max_context_turns must be a positive integer, got {self.max_context_turns}"
            )

        # strict bool validation (no coercion)
        for name in ("cache_enabled", "history_enabled", "dev_mode"):
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ValueError(
                    f"{name} must be a boolean (true/false), "
                    f"got {type(value).__name__}: {value}"
                )

        if not isinstance(self.cache_ttl_seconds, int) or self.cache_ttl_seconds < 1:
            raise ValueError(
                f"cache_ttl_seconds must be a positive integer, got {self.cache_ttl_seconds}"
            )
        if not isinstance(self.cache_max_entries, int) or self.cache_max_entries < 1:
            raise ValueError(
                f"cache_max_entries must be a positive integer, got {self.cache_max_entries}"
            )

        for name in ("animation_speed", "highlight_duration", "scroll_delay"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0:
                raise ValueError(f"{name} must be a number >= 0 seconds, got {value}")

        if self.compiler not in VALID_COMPILERS:
            raise ValueError(
                f"compiler must be one of {', '.join(VALID_COMPILERS)}, got '{self.compiler}'"
            )
        if not isinstance(self.compile_timeout, int) or self.compile_timeout < 1:
            raise ValueError(
                f"compile_timeout must be a positive integer, got {self.compile_timeout}"
            )

    @property
    def history_file(self) -> Path:
        return Path(self.history_path)


# * Coerce a CLI string to the type of an existing setting
def coerce_setting_value(key: str, raw: str) -> Any:
    types = {f.name: f.type for f in fields(QuillSettings)}
    if key not in types:
        raise ValueError(f"Unknown setting: {key}")

    kind = types[key]
    if kind in (bool, "bool"):
        lowered = raw.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
        raise ValueError(f"{key} must be true or false, got '{raw}'")
    if kind in (int, "int"):
        try:
            return int(raw)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got '{raw}'")
    if kind in (float, "float"):
        try:
            return float(raw)
        except ValueError:
            raise ValueError(f"{key} must be a number, got '{raw}'")
    return raw


# * Settings management class w/ JSON persistence for loading, saving, & modifying settings
class SettingsManager:
    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or Path.home() / ".quill" / "config.json"
        self._settings: Optional[QuillSettings] = None

    # load settings from file or return defaults
    def load(self) -> QuillSettings:
        if self._settings is not None:
            return self._settings

        if self.config_path.exists():
            try:
                data = read_json_safe(self.config_path)
                self._settings = QuillSettings(**data)
            except (JSONParsingError, TypeError, ValueError) as e:
                typer.echo(f"Warning: Invalid config file {self.config_path}: {e}")
                typer.echo("Using default settings")
                self._settings = QuillSettings()
        else:
            self._settings = QuillSettings()

        return self._settings

    # save settings to file
    def save(self, settings: QuillSettings) -> None:
        write_json_safe(asdict(settings), self.config_path)
        self._settings = settings
        self._notify_settings_changed()

    # provider availability depends on settings & env, so drop cached status
    def _notify_settings_changed(self) -> None:
        from ..ai.cache import AICache

        AICache.invalidate_all()

    def get(self, key: str) -> Any:
        settings = self.load()
        return getattr(settings, key, None)

    # set a specific setting value (re-validated through the dataclass)
    def set(self, key: str, value: Any) -> None:
        settings = self.load()
        if not hasattr(settings, key):
            raise ValueError(f"Unknown setting: {key}")

        data = asdict(settings)
        data[key] = value
        self.save(QuillSettings(**data))

    def reset(self) -> None:
        self.save(QuillSettings())

    def list_settings(self) -> Dict[str, Any]:
        return asdict(self.load())


# global settings manager instance
settings_manager = SettingsManager()


# * Retrieve settings preferring injected object from Typer context
def get_settings(
    ctx: typer.Context, provided: Optional[QuillSettings] = None
) -> QuillSettings:
    if provided is not None:
        return provided

    # search ctx, parent, & root for QuillSettings
    candidates: list[typer.Context] = [ctx]
    parent = cast(Optional[typer.Context], getattr(ctx, "parent", None))
    if parent is not None:
        candidates.append(parent)
    find_root = getattr(ctx, "find_root", None)
    root_ctx = (
        cast(Optional[typer.Context], find_root()) if callable(find_root) else None
    )
    if root_ctx is not None:
        candidates.append(root_ctx)

    for c in candidates:
        obj = getattr(c, "obj", None)
        if isinstance(obj, QuillSettings):
            return obj

    return settings_manager.load()
