# tests/unit/config/test_settings.py
# Unit tests for QuillSettings validation, CLI value coercion & JSON persistence

import json
from unittest.mock import Mock

import pytest
import typer

from src.config.settings import (
    QuillSettings,
    SettingsManager,
    coerce_setting_value,
    get_settings,
    settings_manager,
)


class TestQuillSettings:

    def test_defaults_are_valid(self):
        settings = QuillSettings()
        assert settings.model == "gpt-5-mini"
        assert settings.compiler == "tectonic"
        assert settings.history_file.name == "history.jsonl"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"temperature": 2.5},
            {"temperature": True},
            {"max_context_turns": 0},
            {"cache_enabled": "yes"},
            {"cache_ttl_seconds": 0},
            {"animation_speed": -0.1},
            {"compiler": "latexmk"},
            {"compile_timeout": 0},
        ],
    )
    def test_invalid_values_are_rejected(self, overrides):
        with pytest.raises(ValueError):
            QuillSettings(**overrides)


class TestCoerceSettingValue:

    @pytest.mark.parametrize(
        "key,raw,expected",
        [
            ("temperature", "0.4", 0.4),
            ("max_context_turns", "6", 6),
            ("cache_enabled", "off", False),
            ("history_enabled", "YES", True),
            ("model", "claude-sonnet-4.5", "claude-sonnet-4.5"),
        ],
    )
    def test_coercion(self, key, raw, expected):
        assert coerce_setting_value(key, raw) == expected

    @pytest.mark.parametrize(
        "key,raw",
        [("temperature", "warm"), ("compile_timeout", "1.5"), ("dev_mode", "maybe"), ("colour", "x")],
    )
    def test_bad_values(self, key, raw):
        with pytest.raises(ValueError):
            coerce_setting_value(key, raw)


class TestSettingsManager:

    def test_load_reads_isolated_config(self):
        settings = settings_manager.load()
        assert settings.temperature == 0.2
        assert settings.animation_speed == 0.0

    def test_set_persists_and_revalidates(self):
        settings_manager.set("compiler", "xelatex")

        data = json.loads(settings_manager.config_path.read_text())
        assert data["compiler"] == "xelatex"
        assert settings_manager.load().compiler == "xelatex"

        with pytest.raises(ValueError):
            settings_manager.set("compiler", "word")

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown setting"):
            settings_manager.set("colour", "red")

    def test_reset_restores_defaults(self):
        settings_manager.reset()
        assert settings_manager.get("temperature") == QuillSettings().temperature

    def test_missing_file_uses_defaults(self, tmp_path):
        manager = SettingsManager(tmp_path / "nope.json")
        assert manager.load() == QuillSettings()

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"temperature": 9}))

        assert SettingsManager(path).load() == QuillSettings()
        assert "Invalid config file" in capsys.readouterr().out


class TestGetSettings:

    def test_prefers_explicit_object(self):
        provided = QuillSettings(model="gpt-4o")
        assert get_settings(Mock(spec=typer.Context), provided) is provided

    def test_reads_root_context(self):
        root = Mock(spec=typer.Context)
        root.obj = QuillSettings(model="gpt-4o")
        ctx = Mock(spec=typer.Context)
        ctx.obj = None
        ctx.parent = None
        ctx.find_root.return_value = root

        assert get_settings(ctx).model == "gpt-4o"

    def test_falls_back_to_manager(self):
        ctx = Mock(spec=typer.Context)
        ctx.obj = None
        ctx.parent = None
        ctx.find_root.return_value = None

        assert get_settings(ctx).temperature == 0.2
