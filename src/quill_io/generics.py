# src/quill_io/generics.py
# Generic filesystem helpers for JSON, JSON-lines & text files

from pathlib import Path
from typing import Any, Iterator, Union
import json

from ..core.exceptions import FileReadError, FileWriteError, JSONParsingError
from ..core.verbose import vlog_file_read, vlog_file_write

def ensure_parent(path: Union[Path, str]) -> None:
    # create parent directories for any file path
    Path(path).parent.mkdir(parents=True, exist_ok=True)

# write JSON w/ UTF-8 encoding, creating parent dirs as needed
def write_json_safe(obj: dict[str, Any], path: Path) -> None:
    ensure_parent(path)
    content = json.dumps(obj, indent=2)
    path.write_text(content, encoding="utf-8")
    vlog_file_write(path, len(content))

# read JSON w/ UTF-8 encoding, return dict
def read_json_safe(path: Path) -> dict[str, Any]:
    text = Path(path).read_text(encoding="utf-8")
    vlog_file_read(path, len(text))
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        # trimmed snippet around the offending line (JSONDecodeError uses 1-based lines)
        lines = text.split("\n")
        line_num = e.lineno - 1
        snippet_start = max(0, line_num - 2)
        snippet_end = min(len(lines), line_num + 3)

        numbered_lines = []
        for i, line in enumerate(lines[snippet_start:snippet_end], start=snippet_start + 1):
            marker = ">>> " if i == e.lineno else "    "
            numbered_lines.append(f"{marker}{i:3}: {line}")

        snippet = "\n".join(numbered_lines)
        raise JSONParsingError(f"Invalid JSON in {path}:\n{snippet}\nError: {e.msg}")

# * Append one JSON object as a line (creates the file & parents)
def append_jsonl(obj: dict[str, Any], path: Path) -> None:
    ensure_parent(path)
    line = json.dumps(obj, ensure_ascii=False)
    try:
        with path.open("a", encoding="utf-8") as fh:
            fh.write(line + "\n")
    except OSError as e:
        raise FileWriteError(f"Cannot append to {path}: {e}", path) from e
    vlog_file_write(path, len(line) + 1)

# * Iterate JSON objects from a JSON-lines file; blank lines are skipped
def iter_jsonl(path: Path) -> Iterator[dict[str, Any]]:
    if not path.exists():
        return
    with path.open("r", encoding="utf-8") as fh:
        for lineno, line in enumerate(fh, start=1):
            if not line.strip():
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise JSONParsingError(f"Invalid JSON in {path} line {lineno}: {e.msg}")

# read UTF-8 text w/ a Quill error on failure
def read_text_safe(path: Path) -> str:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise FileReadError(f"File not found: {path}", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(f"Cannot read {path}: {e}", path) from e
    vlog_file_read(path, len(text))
    return text

# write UTF-8 text, creating parent dirs as needed
def write_text_safe(text: str, path: Path) -> None:
    try:
        ensure_parent(path)
        Path(path).write_text(text, encoding="utf-8")
    except OSError as e:
        raise FileWriteError(f"Cannot write {path}: {e}", path) from e
    vlog_file_write(path, len(text))
