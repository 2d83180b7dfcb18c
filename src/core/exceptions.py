# src/core/exceptions.py
# Custom exception hierarchy for Quill (pure - no I/O operations)

from pathlib import Path


# * Format error message for display (pure string formatting, no I/O)
def format_error_message(error_type: str, message: str) -> str:
    return f"[red]{error_type}:[/] {message}"


# * Base exception for Quill application
class QuillError(Exception):
    pass


# * AI-related exceptions
class AIError(QuillError):
    pass


# * Provider-specific error (API errors, rate limits)
class ProviderError(AIError):
    def __init__(self, message: str, provider: str):
        super().__init__(message)
        self.provider = provider

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, provider={self.provider!r})"
        )


# * API rate limit exceeded
class RateLimitError(ProviderError):
    def __init__(self, message: str, provider: str, retry_after: int | None = None):
        super().__init__(message, provider)
        self.retry_after = retry_after

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"provider={self.provider!r}, retry_after={self.retry_after!r})"
        )


# * Requested model not found or unsupported
class ModelNotFoundError(AIError):
    pass


# * Chat request cancelled by the user (not a failure)
class ChatCancelledError(QuillError):
    pass


# * Configuration errors
class ConfigurationError(QuillError):
    pass


# * Required API key not found
class MissingAPIKeyError(ConfigurationError):
    def __init__(self, message: str, provider: str, env_var: str):
        super().__init__(message)
        self.provider = provider
        self.env_var = env_var

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"provider={self.provider!r}, env_var={self.env_var!r})"
        )


# * JSON parsing errors
class JSONParsingError(QuillError):
    pass


# * Base error for document processing
class DocumentError(QuillError):
    pass


# * Failed to parse document structure
class DocumentParseError(DocumentError):
    pass


# * Document format not supported
class UnsupportedFormatError(DocumentError):
    def __init__(self, message: str, format: str):
        super().__init__(message)
        self.format = format

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, format={self.format!r})"


# * Field edit application errors
class EditError(QuillError):
    pass


# * LaTeX-specific errors
class LaTeXError(QuillError):
    pass


# * External compiler reported a failure
class CompilationError(LaTeXError):
    def __init__(self, message: str, details: str = ""):
        super().__init__(message)
        self.details = details

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, details={self.details!r})"


# * Text extraction from uploaded files failed
class ExtractionError(QuillError):
    pass


# * Conversation history / feedback store errors
class HistoryError(QuillError):
    pass


# * Base error for file I/O operations
class FileOperationError(QuillError):
    def __init__(self, message: str, path: Path | str):
        super().__init__(message)
        self.path = Path(path) if isinstance(path, str) else path

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, path={self.path!r})"


# * Failed to read file
class FileReadError(FileOperationError):
    pass


# * Failed to write file
class FileWriteError(FileOperationError):
    pass
