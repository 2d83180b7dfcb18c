# tests/unit/ui/test_live_buffer.py
# Unit tests for the terminal edit buffer used by animated field edits

from io import StringIO

from rich.console import Console

from src.core.edit_executor import AnimationOptions, EditExecutor
from src.ui.live_buffer import LiveBuffer


def _console() -> Console:
    return Console(file=StringIO(), width=80, force_terminal=False, record=True)


def _render_text(buffer: LiveBuffer, console: Console) -> str:
    console.print(buffer.render())
    return console.export_text()


def test_render_shows_window_around_cursor():
    text = "\n".join(f"line {i}" for i in range(20))
    console = _console()
    buffer = LiveBuffer(text, console=console, context_lines=2)

    buffer.focus(text.index("line 10"))
    output = _render_text(buffer, console)

    assert "line 8" in output
    assert "line 12" in output
    assert "line 7" not in output
    assert "line 13" not in output
    # gutter numbers are 1-based
    assert "  11 line 10" in output


def test_edits_update_text_and_history():
    buffer = LiveBuffer("\\email{a@b.co}", console=_console())

    buffer.focus(7)
    buffer.highlight(7, 13, 0.5)
    buffer.delete(7, 13)
    buffer.insert(7, "x@y.io")

    assert buffer.text() == "\\email{x@y.io}"
    assert buffer.focus_history == [7]
    assert buffer.highlights == [(7, 13, 0.5)]


def test_expired_highlight_is_not_drawn():
    now = {"t": 100.0}
    buffer = LiveBuffer("hello world", console=_console(), clock=lambda: now["t"])
    buffer.highlight(0, 5, 1.0)

    assert any(span.style == "black on yellow" for span in buffer.render().renderable.renderables[0].spans)
    now["t"] = 102.0
    assert not any(span.style == "black on yellow" for span in buffer.render().renderable.renderables[0].spans)


def test_executor_drives_live_buffer(rsection_resume):
    console = _console()
    with LiveBuffer(rsection_resume, console=console) as buffer:
        outcome = EditExecutor(buffer, scheduler=lambda s: None).execute_edit_command(
            "change my email to jane@doe.com",
            AnimationOptions(speed=0.001, highlight_duration=0.0, scroll_delay=0.0),
        )

    assert outcome.success
    assert "\\email{jane@doe.com}" in buffer.text()
