# tests/integration/test_cli_chat.py
# Integration tests for chat, rate & history commands w/ a mocked provider

import re
from pathlib import Path
from types import SimpleNamespace

import pytest
from typer.testing import CliRunner

from src.ai.types import ChatResult
from src.cli.app import app
from src.quill_io.history import HistoryStore

ENV = {"NO_COLOR": "1", "TERM": "dumb"}

EXPERIENCE_REPLY = "Here you go:\n```latex\n\\item Led the payments team\n```\nGood luck!"


def _invoke(*args):
    return CliRunner().invoke(app, [str(a) for a in args], env=ENV)


@pytest.fixture
def fake_chat(monkeypatch, mock_env_vars):
    # records every message list sent to the provider
    calls = []

    def install(text=EXPERIENCE_REPLY, success=True, error=""):
        def run_chat(messages, model, temperature=None, cancel=None):
            calls.append(messages)
            return ChatResult(success=success, text=text, error=error, provider="openai", model=model)

        monkeypatch.setattr("src.ai.clients.factory.run_chat", run_chat)
        return calls

    return install


class TestChat:

    def test_field_edit_skips_the_model(self, fake_chat, resume_file):
        calls = fake_chat()

        result = _invoke("chat", resume_file, "change my email to jane@doe.com")

        assert result.exit_code == 0
        assert calls == []
        assert "Wrote resume" in result.output
        assert "\\email{jane@doe.com}" in resume_file.read_text(encoding="utf-8")

    def test_reply_is_merged_into_section(self, fake_chat, resume_file, tmp_path):
        calls = fake_chat()

        result = _invoke("chat", resume_file, "rewrite my experience section")

        assert result.exit_code == 0
        assert len(calls) == 1
        # the system prompt carries the current document
        assert "Built billing APIs" in calls[0][0]["content"]
        assert calls[0][-1] == {"role": "user", "content": "rewrite my experience section"}

        text = resume_file.read_text(encoding="utf-8")
        assert "\\item Led the payments team" in text
        assert "Built billing APIs" not in text
        assert "Conversation id:" in result.output
        assert (tmp_path / "history.jsonl").exists()

    def test_dry_run_shows_diff_only(self, fake_chat, resume_file, rsection_resume):
        fake_chat()

        result = _invoke("chat", resume_file, "rewrite my experience section", "--dry-run")

        assert result.exit_code == 0
        assert "+\\item Led the payments team" in result.output
        assert resume_file.read_text(encoding="utf-8") == rsection_resume

    def test_plain_answer_leaves_resume(self, fake_chat, resume_file, rsection_resume):
        fake_chat(text="Your skills section reads well already.")

        result = _invoke("chat", resume_file, "is my skills section ok?")

        assert result.exit_code == 0
        assert "reads well already" in result.output
        assert "Wrote resume" not in result.output
        assert resume_file.read_text(encoding="utf-8") == rsection_resume

    def test_out_writes_elsewhere(self, fake_chat, resume_file, rsection_resume, tmp_path):
        fake_chat()
        out = tmp_path / "tailored.tex"

        result = _invoke("chat", resume_file, "rewrite my experience section", "--out", out)

        assert result.exit_code == 0
        assert "Led the payments team" in out.read_text(encoding="utf-8")
        assert resume_file.read_text(encoding="utf-8") == rsection_resume

    def test_provider_error_exits_1(self, fake_chat, resume_file, rsection_resume):
        fake_chat(success=False, error="rate limited")

        result = _invoke("chat", resume_file, "rewrite my experience section")

        assert result.exit_code == 1
        assert "Error: rate limited" in result.output
        assert resume_file.read_text(encoding="utf-8") == rsection_resume

    def test_missing_api_key_is_configuration_error(self, resume_file):
        result = _invoke("chat", resume_file, "rewrite my experience section", "--model", "gpt-5-mini")

        assert result.exit_code == 1
        assert "Configuration Error" in result.output
        assert "OPENAI_API_KEY" in result.output

    def test_attachment_text_reaches_prompt(self, fake_chat, resume_file, tmp_path):
        calls = fake_chat()
        job = tmp_path / "job.txt"
        job.write_text("Seeking a payments engineer", encoding="utf-8")

        result = _invoke("chat", resume_file, "tailor my experience section", "--attach", job)

        assert result.exit_code == 0
        assert any("Seeking a payments engineer" in m["content"] for m in calls[0])

    def test_compile_after_write(self, fake_chat, monkeypatch, resume_file):
        fake_chat()

        def run(cmd, cwd=None, **kwargs):
            (Path(cwd) / "resume.pdf").write_bytes(b"%PDF-1.7 fake")
            return SimpleNamespace(returncode=0, stdout="", stderr="")

        monkeypatch.setattr("src.quill_io.compiler.subprocess.run", run)

        result = _invoke("chat", resume_file, "rewrite my experience section", "--compile")

        assert result.exit_code == 0
        assert "Compiled PDF" in result.output
        assert resume_file.with_suffix(".pdf").exists()


class TestRateAndHistory:

    def test_rate_reply_from_chat(self, fake_chat, resume_file, tmp_path):
        fake_chat()
        result = _invoke("chat", resume_file, "rewrite my experience section")
        conversation_id = re.search(r"Conversation id: (\w+)", result.output).group(1)

        result = _invoke("rate", conversation_id, 5, "--helpful")

        assert result.exit_code == 0
        record = HistoryStore(tmp_path / "history.jsonl").get(conversation_id)
        assert record.rating == 5
        assert record.was_helpful is True

    def test_rate_unknown_id(self):
        result = _invoke("rate", "deadbeef0000", 3)

        assert result.exit_code == 1
        assert "History Error" in result.output

    def test_rate_out_of_range(self):
        assert _invoke("rate", "deadbeef0000", 9).exit_code == 2

    def test_history_list_search_and_stats(self, tmp_path):
        store = HistoryStore(tmp_path / "history.jsonl")
        first = store.append_turn("s1", "shorten my summary", "done")
        second = store.append_turn("s1", "tailor skills for Go", "done")
        store.rate(first, 4)

        listed = _invoke("history")
        assert listed.exit_code == 0
        assert first in listed.output
        assert second in listed.output

        found = _invoke("history", "--search", "skills")
        assert second in found.output
        assert first not in found.output

        stats = _invoke("history", "--stats")
        assert "total_conversations: 2" in stats.output
        assert "avg_rating: 4.0" in stats.output

    def test_history_disabled(self):
        _invoke("config", "set", "history_enabled", "false")

        result = _invoke("history")

        assert result.exit_code == 1
        assert "History is disabled" in result.output
