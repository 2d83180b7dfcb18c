# src/quill_io/compiler.py
# LaTeX -> PDF compilation through an external engine (tectonic or a TeX Live binary)
#
# * Failures are reported w/ the engine's output verbatim & never retried.

from __future__ import annotations

import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path

from ..core.exceptions import CompilationError
from ..core.output import LogCategory
from ..core.verbose import vlog

JOB_NAME = "resume"

# warning markers worth surfacing from engine logs
_WARNING_MARKERS = ("Warning", "Underfull", "Overfull")


# * Result of one compilation
@dataclass(slots=True)
class CompileResult:
    success: bool
    pdf_bytes: bytes = b""
    error: str = ""
    details: str = ""
    log: str = ""
    warnings: list[str] | None = None


# * Build the engine command line for a .tex file compiled into out_dir
def build_command(compiler: str, tex_path: Path, out_dir: Path) -> list[str]:
    if compiler == "tectonic":
        return ["tectonic", str(tex_path), "--outdir", str(out_dir)]
    return [
        compiler,
        "-interaction=nonstopmode",
        "-halt-on-error",
        f"-output-directory={out_dir}",
        str(tex_path),
    ]


def _collect_warnings(output: str) -> list[str]:
    return [
        line.strip()
        for line in output.split("\n")
        if line.strip() and any(marker in line for marker in _WARNING_MARKERS)
    ]


# * Compile a document string & return the PDF bytes or the engine's error output
def compile_latex(document: str, compiler: str = "tectonic", timeout: int = 60) -> CompileResult:
    with tempfile.TemporaryDirectory() as tmpdir:
        out_dir = Path(tmpdir)
        tex_path = out_dir / f"{JOB_NAME}.tex"
        tex_path.write_text(document, encoding="utf-8")
        cmd = build_command(compiler, tex_path, out_dir)
        vlog(LogCategory.COMPILE, f"Running {compiler}", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                cwd=tmpdir,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError:
            return CompileResult(
                success=False,
                error=f"LaTeX compiler '{compiler}' not found",
                details=f"Install {compiler} or choose another engine w/ `quill config set compiler ...`",
            )
        except subprocess.TimeoutExpired:
            return CompileResult(
                success=False,
                error=f"LaTeX compilation timed out after {timeout}s",
            )

        log = (proc.stdout or "") + (proc.stderr or "")
        pdf_path = out_dir / f"{JOB_NAME}.pdf"
        if proc.returncode == 0 and pdf_path.exists():
            pdf_bytes = pdf_path.read_bytes()
            vlog(LogCategory.COMPILE, f"Compiled {len(pdf_bytes):,} byte PDF")
            return CompileResult(
                success=True,
                pdf_bytes=pdf_bytes,
                log=log,
                warnings=_collect_warnings(log),
            )

        return CompileResult(
            success=False,
            error="LaTeX compilation failed",
            details=proc.stderr or proc.stdout or "Compilation error",
            log=log,
        )


# * Compile & write the PDF; raises CompilationError on failure
def compile_to_file(
    document: str, out_path: Path, compiler: str = "tectonic", timeout: int = 60
) -> CompileResult:
    result = compile_latex(document, compiler=compiler, timeout=timeout)
    if not result.success:
        raise CompilationError(result.error, details=result.details)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(result.pdf_bytes)
    return result


# * Check whether a compiler is installed; returns (installed, version or message)
def check_compiler(compiler: str = "tectonic") -> tuple[bool, str]:
    try:
        proc = subprocess.run(
            [compiler, "--version"],
            capture_output=True,
            text=True,
            timeout=5,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        return False, f"{compiler} is not installed or not in PATH"

    first_line = (proc.stdout or "").strip().split("\n")[0]
    return True, first_line or f"{compiler} is installed"
