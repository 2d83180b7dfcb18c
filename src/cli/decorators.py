# src/cli/decorators.py
# CLI decorator mapping Quill errors to readable Rich output & exit code 1

import functools
from typing import Callable, TypeVar, Any, cast

import typer

from ..core.exceptions import (
    QuillError,
    JSONParsingError,
    AIError,
    EditError,
    ConfigurationError,
    CompilationError,
    LaTeXError,
    DocumentError,
    ExtractionError,
    HistoryError,
    FileOperationError,
    format_error_message,
)

F = TypeVar("F", bound=Callable[..., Any])


# * Decorator for handling Quill errors in CLI commands w/ Rich output
def handle_quill_error(func: F) -> F:
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        # ! Lazy import to avoid circular dependencies
        from ..quill_io.console import console

        try:
            return func(*args, **kwargs)
        except (typer.Exit, typer.Abort, typer.BadParameter):
            # Typer control flow, handled by Click
            raise
        except JSONParsingError as e:
            console.print(format_error_message("JSON Parsing Error", str(e)))
            raise SystemExit(1)
        except AIError as e:
            console.print(format_error_message("AI Error", str(e)))
            raise SystemExit(1)
        except EditError as e:
            console.print(format_error_message("Edit Error", str(e)))
            raise SystemExit(1)
        except ConfigurationError as e:
            console.print(format_error_message("Configuration Error", str(e)))
            raise SystemExit(1)
        except CompilationError as e:
            console.print(format_error_message("Compilation Error", str(e)))
            if e.details:
                from rich.markup import escape

                console.print(f"[dim]{escape(e.details)}[/]")
            raise SystemExit(1)
        except LaTeXError as e:
            console.print(format_error_message("LaTeX Error", str(e)))
            raise SystemExit(1)
        except DocumentError as e:
            console.print(format_error_message("Document Error", str(e)))
            raise SystemExit(1)
        except ExtractionError as e:
            console.print(format_error_message("Extraction Error", str(e)))
            raise SystemExit(1)
        except HistoryError as e:
            console.print(format_error_message("History Error", str(e)))
            raise SystemExit(1)
        except FileOperationError as e:
            console.print(format_error_message("File Error", str(e)))
            raise SystemExit(1)
        except QuillError as e:
            console.print(format_error_message("Error", str(e)))
            raise SystemExit(1)
        except Exception as e:
            console.print(format_error_message("Unexpected Error", str(e)))
            raise SystemExit(1)

    return cast(F, wrapper)
