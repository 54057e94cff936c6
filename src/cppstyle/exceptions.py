"""Exceptions for formatting operations."""


class CppStyleError(Exception):
    """Base exception for all formatting operations."""


class ConfigNotFoundError(CppStyleError):
    """Raised when no .clang-format or _clang-format exists in any parent directory."""


class ExecutableError(CppStyleError):
    """Base exception for clang-format executable checks."""


class ExecutableNotConfiguredError(ExecutableError):
    """Raised when no clang-format path is specified."""


class ExecutableMissingError(ExecutableError):
    """Raised when the configured clang-format path does not exist."""


class ExecutableNotRunnableError(ExecutableError):
    """Raised when the configured clang-format path is not executable."""


class ProcessError(CppStyleError):
    """Base exception for subprocess failures."""


class ProcessSpawnError(ProcessError):
    """Raised when the formatter process cannot be started."""


class SourceEncodingError(ProcessError):
    """Raised when the source text cannot be encoded for the formatter."""


class StreamInterruptedError(ProcessError):
    """Raised when the exchange with a running formatter is interrupted."""


class FormatterTimeoutError(StreamInterruptedError):
    """Raised when the formatter does not exit within the timeout."""


class FormatterOutputError(CppStyleError):
    """Base exception for formatter output that cannot be trusted."""

    def __init__(self, message: str, stderr: str = "") -> None:
        super().__init__(message)
        self.stderr = stderr


class FormatterNonzeroExitError(FormatterOutputError):
    """Raised when the formatter exits with a non-zero code."""

    def __init__(self, exit_code: int, stderr: str = "") -> None:
        super().__init__(f"clang-format return error ({exit_code}).", stderr)
        self.exit_code = exit_code


class FormatterReportedWarningsError(FormatterOutputError):
    """Raised when the formatter exits cleanly but writes to stderr."""

    def __init__(self, stderr: str) -> None:
        super().__init__("clang-format reported errors or warnings.", stderr)


class EditApplicationError(CppStyleError):
    """Raised when an edit script does not fit the target document."""
