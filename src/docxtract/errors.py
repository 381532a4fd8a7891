"""Exception types for docxtract."""

from __future__ import annotations


class DocxtractError(Exception):
    """Base exception for docxtract."""


class ExecutableError(DocxtractError):
    """Base exception for external process execution errors."""


class InvalidArgumentCountError(ExecutableError):
    """Raised when the unzip command is not given exactly three arguments."""

    def __init__(self, count: int) -> None:
        super().__init__(f"unzip requires exactly 3 arguments, got {count}")
        self.count = count


class LaunchError(ExecutableError):
    """Raised when the child process could not be started."""


class NonZeroExitError(ExecutableError):
    """Raised when the child process exits with a non-zero status code."""

    def __init__(self, code: int) -> None:
        super().__init__(f"process exited with code {code}")
        self.code = code


class OutputReadError(ExecutableError):
    """Raised when the output pipe could not be read to the end."""


class OutputDecodeError(ExecutableError):
    """Raised when captured output is not valid UTF-8."""


class ExecutionTimeoutError(ExecutableError):
    """Raised when the deadline elapses before the process exits."""


class DeadlineNotConfiguredError(ExecutableError):
    """Raised when streaming execution is requested without a deadline."""


class ExtractError(DocxtractError):
    """Base exception for document extraction errors."""


class PathPropertiesError(ExtractError):
    """Raised when the selected document path is not usable."""


class ContentFileNotFoundError(ExtractError):
    """Raised when word/document.xml is missing after decompression."""


class MarkupParseError(DocxtractError):
    """Raised when the content markup is not well-formed."""
