# tests/unit/quill_io/test_compiler.py
# Unit tests for LaTeX compilation w/ the engine subprocess mocked out

import subprocess
from pathlib import Path
from types import SimpleNamespace

import pytest

from src.core.exceptions import CompilationError
from src.quill_io.compiler import (
    build_command,
    check_compiler,
    compile_latex,
    compile_to_file,
)


class FakeEngine:
    def __init__(self, returncode=0, stdout="", stderr="", write_pdf=True):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.write_pdf = write_pdf
        self.cmds: list[list[str]] = []

    def __call__(self, cmd, cwd=None, capture_output=False, text=False, timeout=None):
        self.cmds.append(cmd)
        if self.write_pdf:
            (Path(cwd) / "resume.pdf").write_bytes(b"%PDF-1.7 fake")
        return SimpleNamespace(returncode=self.returncode, stdout=self.stdout, stderr=self.stderr)


def test_build_command():
    tex, out = Path("/tmp/x/resume.tex"), Path("/tmp/x")

    assert build_command("tectonic", tex, out) == ["tectonic", str(tex), "--outdir", str(out)]
    pdflatex = build_command("pdflatex", tex, out)
    assert pdflatex[0] == "pdflatex"
    assert "-interaction=nonstopmode" in pdflatex
    assert pdflatex[-1] == str(tex)


def test_successful_compile_collects_warnings(monkeypatch):
    engine = FakeEngine(stdout="note: Running TeX ...\nwarning-free line\nOverfull \\hbox in paragraph\n")
    monkeypatch.setattr("src.quill_io.compiler.subprocess.run", engine)

    result = compile_latex("\\documentclass{article}", compiler="tectonic", timeout=5)

    assert result.success
    assert result.pdf_bytes == b"%PDF-1.7 fake"
    assert result.warnings == ["Overfull \\hbox in paragraph"]
    assert engine.cmds[0][0] == "tectonic"


def test_engine_error_output_is_kept_verbatim(monkeypatch):
    engine = FakeEngine(returncode=1, stderr="! Undefined control sequence.\nl.12 \\foo", write_pdf=False)
    monkeypatch.setattr("src.quill_io.compiler.subprocess.run", engine)

    result = compile_latex("\\documentclass{article}")

    assert result.success is False
    assert result.details == "! Undefined control sequence.\nl.12 \\foo"
    assert len(engine.cmds) == 1


def test_missing_engine(monkeypatch):
    def not_found(*args, **kwargs):
        raise FileNotFoundError("tectonic")

    monkeypatch.setattr("src.quill_io.compiler.subprocess.run", not_found)

    result = compile_latex("x")

    assert result.success is False
    assert "not found" in result.error


def test_timeout(monkeypatch):
    def too_slow(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs.get("timeout"))

    monkeypatch.setattr("src.quill_io.compiler.subprocess.run", too_slow)

    assert "timed out after 3s" in compile_latex("x", timeout=3).error


def test_compile_to_file(monkeypatch, tmp_path):
    monkeypatch.setattr("src.quill_io.compiler.subprocess.run", FakeEngine())
    out = tmp_path / "build" / "resume.pdf"

    compile_to_file("\\documentclass{article}", out)

    assert out.read_bytes() == b"%PDF-1.7 fake"


def test_compile_to_file_raises(monkeypatch, tmp_path):
    monkeypatch.setattr(
        "src.quill_io.compiler.subprocess.run",
        FakeEngine(returncode=1, stderr="boom", write_pdf=False),
    )

    with pytest.raises(CompilationError) as exc_info:
        compile_to_file("x", tmp_path / "resume.pdf")
    assert exc_info.value.details == "boom"
    assert not (tmp_path / "resume.pdf").exists()


def test_check_compiler(monkeypatch):
    monkeypatch.setattr(
        "src.quill_io.compiler.subprocess.run",
        lambda cmd, **kwargs: SimpleNamespace(returncode=0, stdout="Tectonic 0.15.0\nmore", stderr=""),
    )
    assert check_compiler("tectonic") == (True, "Tectonic 0.15.0")

    def not_found(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr("src.quill_io.compiler.subprocess.run", not_found)
    installed, message = check_compiler("xelatex")
    assert installed is False
    assert "xelatex is not installed" in message
