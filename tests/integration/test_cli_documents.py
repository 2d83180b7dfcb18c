# tests/integration/test_cli_documents.py
# Integration tests for edit, merge, locate, extract & compile commands on real files

from pathlib import Path
from types import SimpleNamespace

from docx import Document
from typer.testing import CliRunner

from src.cli.app import app

ENV = {"NO_COLOR": "1", "TERM": "dumb"}


def _invoke(*args):
    return CliRunner().invoke(app, [str(a) for a in args], env=ENV)


class TestEdit:

    def test_no_animate_writes_edit(self, resume_file):
        result = _invoke("edit", resume_file, "change my email to jane@doe.com", "--no-animate")

        assert result.exit_code == 0
        assert "Updated email" in result.output
        text = resume_file.read_text(encoding="utf-8")
        assert "\\email{jane@doe.com}" in text
        assert "jane@old.com" not in text

    # config sets every animation delay to zero
    def test_animated_edit_matches_instant(self, resume_file, tmp_path):
        instant_out = tmp_path / "instant.tex"
        animated_out = tmp_path / "animated.tex"

        _invoke("edit", resume_file, "change my name to Janet Doe", "--no-animate", "--out", instant_out)
        result = _invoke("edit", resume_file, "change my name to Janet Doe", "--out", animated_out)

        assert result.exit_code == 0
        assert animated_out.read_text(encoding="utf-8") == instant_out.read_text(encoding="utf-8")

    def test_unrecognized_command_fails(self, resume_file, rsection_resume):
        result = _invoke("edit", resume_file, "make it pop", "--no-animate")

        assert result.exit_code == 1
        assert "Edit Error" in result.output
        assert resume_file.read_text(encoding="utf-8") == rsection_resume


class TestMerge:

    def test_section_reply(self, resume_file, tmp_path):
        reply = tmp_path / "reply.md"
        reply.write_text("Sure!\n```latex\n\\item Led the payments team\n```\n", encoding="utf-8")

        result = _invoke("merge", resume_file, reply, "update my experience section")

        assert result.exit_code == 0
        assert "experience" in result.output
        text = resume_file.read_text(encoding="utf-8")
        assert "\\item Led the payments team" in text
        assert "Built billing APIs" not in text
        assert "State University" in text

    def test_dry_run_leaves_file(self, resume_file, rsection_resume, tmp_path):
        reply = tmp_path / "reply.tex"
        reply.write_text("\\name{Janet Doe}", encoding="utf-8")

        result = _invoke("merge", resume_file, reply, "fix my header", "--dry-run")

        assert result.exit_code == 0
        assert "preamble" in result.output
        assert "Janet Doe" in result.output
        assert resume_file.read_text(encoding="utf-8") == rsection_resume

    def test_warning_is_shown(self, resume_file, tmp_path):
        reply = tmp_path / "reply.tex"
        reply.write_text("AWS Solutions Architect", encoding="utf-8")
        out = tmp_path / "merged.tex"

        result = _invoke("merge", resume_file, reply, "update my certifications section", "--out", out)

        assert result.exit_code == 0
        assert "Warning" in result.output
        assert "AWS Solutions Architect" in out.read_text(encoding="utf-8")


class TestLocate:

    def test_section(self, resume_file):
        result = _invoke("locate", resume_file, "--section", "education")

        assert result.exit_code == 0
        assert "State University" in result.output

    def test_missing_section_exits_1(self, resume_file):
        result = _invoke("locate", resume_file, "-s", "publications")

        assert result.exit_code == 1
        assert "Section not found" in result.output

    def test_field(self, resume_file):
        result = _invoke("locate", resume_file, "--field", "change my phone to 555-222-3333")

        assert result.exit_code == 0
        assert "(555) 123-4567" in result.output
        assert "555-222-3333" in result.output

    def test_exactly_one_option(self, resume_file):
        assert _invoke("locate", resume_file).exit_code == 2
        assert _invoke("locate", resume_file, "-s", "skills", "-f", "change my name to X").exit_code == 2


class TestExtract:

    def test_text_file_is_printed_literally(self, tmp_path):
        path = tmp_path / "job.txt"
        path.write_text("Need [bold] Go engineers", encoding="utf-8")

        result = _invoke("extract", path)

        assert result.exit_code == 0
        assert "Need [bold] Go engineers" in result.output

    def test_docx_to_file(self, tmp_path):
        path = tmp_path / "resume.docx"
        doc = Document()
        doc.add_paragraph("Jane Doe, Backend Engineer")
        doc.save(str(path))
        out = tmp_path / "resume.txt"

        result = _invoke("extract", path, "--out", out)

        assert result.exit_code == 0
        assert "Jane Doe, Backend Engineer" in out.read_text(encoding="utf-8")

    def test_unsupported_type(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(b"\x89PNG")

        result = _invoke("extract", path)

        assert result.exit_code == 1
        assert "Extraction Error" in result.output


class TestCompile:

    def _fake_engine(self, monkeypatch, returncode=0, stderr=""):
        def run(cmd, cwd=None, **kwargs):
            if returncode == 0:
                (Path(cwd) / "resume.pdf").write_bytes(b"%PDF-1.7 fake")
            return SimpleNamespace(returncode=returncode, stdout="", stderr=stderr)

        monkeypatch.setattr("src.quill_io.compiler.subprocess.run", run)

    def test_compile_writes_pdf_next_to_resume(self, monkeypatch, resume_file):
        self._fake_engine(monkeypatch)

        result = _invoke("compile", resume_file)

        assert result.exit_code == 0
        assert resume_file.with_suffix(".pdf").read_bytes() == b"%PDF-1.7 fake"

    def test_compiler_failure_shows_engine_output(self, monkeypatch, resume_file):
        self._fake_engine(monkeypatch, returncode=1, stderr="! Undefined control sequence.")

        result = _invoke("compile", resume_file, "--compiler", "pdflatex")

        assert result.exit_code == 1
        assert "Compilation Error" in result.output
        assert "Undefined control sequence" in result.output

    def test_unknown_compiler_is_rejected(self, resume_file):
        assert _invoke("compile", resume_file, "--compiler", "word").exit_code == 2

    def test_check(self, monkeypatch, resume_file):
        monkeypatch.setattr(
            "src.quill_io.compiler.subprocess.run",
            lambda cmd, **kwargs: SimpleNamespace(returncode=0, stdout="Tectonic 0.15.0", stderr=""),
        )

        result = _invoke("compile", resume_file, "--check")

        assert result.exit_code == 0
        assert "Tectonic 0.15.0" in result.output
