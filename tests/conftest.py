# tests/conftest.py
# Pytest configuration w/ isolation fixtures for deterministic test runs

import json
from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    # Patch Path.home() to isolated temp directory
    fake_home = tmp_path / "fake_home"
    fake_home.mkdir()

    # Create isolated .quill directory
    quill_dir = fake_home / ".quill"
    quill_dir.mkdir()

    # Create minimal config.json w/ test defaults
    config_data = {
        "model": "gpt-5-mini",
        "temperature": 0.2,
        "animation_speed": 0.0,
        "highlight_duration": 0.0,
        "scroll_delay": 0.0,
        "history_path": str(tmp_path / "history.jsonl"),
        "dev_mode": False,
    }

    config_file = quill_dir / "config.json"
    with open(config_file, "w") as f:
        json.dump(config_data, f, indent=2)

    # Patch Path.home() to return fake home
    monkeypatch.setattr(Path, "home", lambda: fake_home)

    # keep provider keys from the developer's shell out of tests
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

    # ! reset global settings_manager state & patch its config_path to use isolated location
    from src.config.settings import settings_manager

    settings_manager._settings = None
    settings_manager.config_path = config_file

    # ! reset provider availability cache
    from src.ai.cache import AICache

    AICache.invalidate_all()

    # ! reset output manager to NullOutputManager for test isolation
    from src.core.output import reset_output_manager

    reset_output_manager()

    yield fake_home

    reset_output_manager()


@pytest.fixture(autouse=True)
def block_network():
    # Block all network calls by default w/ pytest-socket
    # tests requiring network must explicitly enable w/ pytest.mark.enable_socket
    try:
        pytest_socket = pytest.importorskip("pytest_socket")
        pytest_socket.disable_socket()
    except pytest.skip.Exception:
        # Pytest-socket not installed, skip network blocking
        pass


@pytest.fixture
def mock_env_vars(monkeypatch):
    # Seed test environment w/ required API keys
    test_env = {
        "OPENAI_API_KEY": "test-openai-key-12345",
        "ANTHROPIC_API_KEY": "test-anthropic-key-12345",
    }
    for key, value in test_env.items():
        monkeypatch.setenv(key, value)
    return test_env


def _read_fixture(name: str) -> str:
    return (FIXTURES_DIR / "latex" / name).read_text(encoding="utf-8")


@pytest.fixture
def rsection_resume() -> str:
    # rSection template family w/ preamble contact commands
    return _read_fixture("resume_rsection.tex")


@pytest.fixture
def sections_resume() -> str:
    # \section / \section* headings
    return _read_fixture("resume_sections.tex")


@pytest.fixture
def comments_resume() -> str:
    # "% TITLE" headings separated by %%% rules
    return _read_fixture("resume_comments.tex")


@pytest.fixture
def resume_file(tmp_path, rsection_resume) -> Path:
    path = tmp_path / "resume.tex"
    path.write_text(rsection_resume, encoding="utf-8")
    return path


@pytest.fixture
def test_settings():
    # settings w/ zero animation delays, independent of the config file
    from src.config.settings import QuillSettings

    return QuillSettings(
        temperature=0.2,
        animation_speed=0.0,
        highlight_duration=0.0,
        scroll_delay=0.0,
    )


# * Capture verbose log lines in memory (reset by isolate_config afterwards)
@pytest.fixture
def recorded_log():
    from src.core.output import RecordingOutputManager, set_output_manager

    manager = RecordingOutputManager()
    set_output_manager(manager)
    return manager
