# src/ui/__init__.py
# Terminal rendering for the CLI: live edit buffer & result reports

from .live_buffer import LiveBuffer
from .reporting import (
    render_diff,
    report_update,
    report_edit,
    report_outcome,
    report_boundary,
    report_field,
    report_compile,
    report_history,
)

__all__ = [
    "LiveBuffer",
    "render_diff",
    "report_update",
    "report_edit",
    "report_outcome",
    "report_boundary",
    "report_field",
    "report_compile",
    "report_history",
]
