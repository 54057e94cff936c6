"""Run clang-format as a subprocess over stdin/stdout."""

import logging
import os
import subprocess
from pathlib import Path

from cppstyle.exceptions import (
    ExecutableMissingError,
    ExecutableNotConfiguredError,
    ExecutableNotRunnableError,
    FormatterTimeoutError,
    ProcessSpawnError,
    SourceEncodingError,
    StreamInterruptedError,
)
from cppstyle.models.format_models import (
    DEFAULT_FALLBACK_STYLE,
    DEFAULT_TIMEOUT_SECONDS,
    ProcessResult,
    Selection,
)

logger = logging.getLogger(__name__)

STYLE_ARG = "-style=file"
ENCODING = "utf-8"


def check_executable(path: str | None) -> None:
    """Verify that path names an existing, executable regular file.

    Raises:
        ExecutableNotConfiguredError: If no path is given.
        ExecutableMissingError: If the path does not exist or is not a file.
        ExecutableNotRunnableError: If the file is not executable.
    """
    if not path:
        raise ExecutableNotConfiguredError("clang-format is not specified.")

    exe = Path(path)
    if not exe.is_file():
        raise ExecutableMissingError(f"clang-format ({path}) does not exist.")
    if not os.access(exe, os.X_OK):
        raise ExecutableNotRunnableError(f"clang-format ({path}) is not executable.")


def build_command(
    executable_path: str,
    file_path: str,
    fallback_style: str = DEFAULT_FALLBACK_STYLE,
    selection: Selection | None = None,
) -> list[str]:
    """Build the clang-format argv.

    clang-format does its own search for the configuration (-style=file)
    and falls back to a built-in style when it finds none.
    """
    command = [
        executable_path,
        f"-assume-filename={file_path}",
        STYLE_ARG,
        f"-fallback-style={fallback_style}",
    ]
    if selection is not None:
        command.append(f"-offset={selection.offset}")
        command.append(f"-length={selection.length}")
    return command


class ProcessRunner:
    """Feeds source text to a formatter and collects stdout/stderr.

    ``Popen.communicate`` writes stdin and drains both output pipes with
    independent progress, so a child that fills one pipe while the other
    is unread cannot deadlock the exchange.
    """

    def __init__(self, timeout_seconds: float | None = DEFAULT_TIMEOUT_SECONDS) -> None:
        self.timeout_seconds = timeout_seconds

    def run(self, command: list[str], source_text: str, cwd: str) -> ProcessResult:
        """Run command with source_text on stdin.

        Args:
            command: Full argv, executable first.
            source_text: Text written to the child's stdin.
            cwd: Working directory for the child (the workspace root).

        Returns:
            ProcessResult with exit code and decoded stdout/stderr.

        Raises:
            SourceEncodingError: If source_text cannot be encoded as UTF-8.
            ProcessSpawnError: If the process cannot be started.
            StreamInterruptedError: If the exchange fails or is interrupted.
            FormatterTimeoutError: If the process outlives timeout_seconds.
        """
        try:
            payload = source_text.encode(ENCODING)
        except UnicodeEncodeError as exc:
            raise SourceEncodingError(f"Cannot encode source as {ENCODING}: {exc}") from exc

        logger.debug("Running %s in %s", command, cwd)
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=cwd,
            )
        except OSError as exc:
            raise ProcessSpawnError(f"Failed to start {command[0]}: {exc}") from exc

        with process:
            try:
                stdout, stderr = process.communicate(
                    input=payload,
                    timeout=self.timeout_seconds,
                )
            except subprocess.TimeoutExpired as exc:
                _kill(process)
                raise FormatterTimeoutError(
                    f"{command[0]} did not exit within {self.timeout_seconds}s"
                ) from exc
            except (OSError, KeyboardInterrupt) as exc:
                _kill(process)
                raise StreamInterruptedError(
                    f"Interrupted while talking to {command[0]}: {exc!r}"
                ) from exc

        logger.debug("%s exited with %d", command[0], process.returncode)
        return ProcessResult(
            exit_code=process.returncode,
            stdout=stdout.decode(ENCODING, errors="replace"),
            stderr=stderr.decode(ENCODING, errors="replace"),
        )


def _kill(process: subprocess.Popen) -> None:
    """Kill and reap a child whose output is being discarded."""
    process.kill()
    process.wait()
    logger.warning("Killed formatter process %s", process.pid)
