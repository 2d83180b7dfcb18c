# src/core/debug.py
# Dev-mode debug logging; delegates to the registered OutputManager

from .output import LogCategory, get_output_manager


# * Log exception details in debug mode (for failures that are recovered from)
def debug_error(error: BaseException, context: str = "") -> None:
    error_msg = f"Exception: {type(error).__name__}: {error}"
    if context:
        error_msg = f"{context} - {error_msg}"
    get_output_manager().debug(error_msg, LogCategory.ERROR)
