"""Format pipeline: config lookup, clang-format run, diff, edit script."""

import logging
import sys
from pathlib import Path
from typing import TextIO

from cppstyle.exceptions import (
    ConfigNotFoundError,
    CppStyleError,
    ExecutableMissingError,
    ExecutableNotConfiguredError,
    ExecutableNotRunnableError,
    FormatterNonzeroExitError,
    FormatterOutputError,
    FormatterReportedWarningsError,
    ProcessSpawnError,
    SourceEncodingError,
    StreamInterruptedError,
)
from cppstyle.formatter.config_resolver import ConfigResolver
from cppstyle.formatter.process_runner import ProcessRunner, build_command, check_executable
from cppstyle.models.format_models import (
    DEFAULT_FALLBACK_STYLE,
    DEFAULT_TIMEOUT_SECONDS,
    FormatRequest,
    FormatterConfig,
    ProcessResult,
    Selection,
)
from cppstyle.models.outcome_models import FailureReason, FormatOutcome, PipelineStage
from cppstyle.settings import EnvSettings, SettingsLookup, clang_format_path
from cppstyle.utils.diff_engine import DiffEngine
from cppstyle.utils.edit_translator import translate

logger = logging.getLogger(__name__)

# Most specific first; StreamInterruptedError covers FormatterTimeoutError
_FAILURE_REASONS: list[tuple[type[CppStyleError], FailureReason]] = [
    (ExecutableNotConfiguredError, FailureReason.EXECUTABLE_NOT_CONFIGURED),
    (ExecutableMissingError, FailureReason.EXECUTABLE_MISSING),
    (ExecutableNotRunnableError, FailureReason.EXECUTABLE_NOT_RUNNABLE),
    (ConfigNotFoundError, FailureReason.CONFIG_NOT_FOUND),
    (ProcessSpawnError, FailureReason.PROCESS_ERROR),
    (SourceEncodingError, FailureReason.SOURCE_NOT_ENCODABLE),
    (StreamInterruptedError, FailureReason.STREAM_INTERRUPTED),
    (FormatterNonzeroExitError, FailureReason.NONZERO_EXIT),
    (FormatterReportedWarningsError, FailureReason.FORMATTER_REPORTED_WARNINGS),
]


def validate_output(result: ProcessResult) -> str:
    """Return stdout if the formatter run can be trusted.

    Raises:
        FormatterNonzeroExitError: On a non-zero exit code.
        FormatterReportedWarningsError: On exit 0 with anything on stderr.
    """
    if result.exit_code != 0:
        raise FormatterNonzeroExitError(result.exit_code, result.stderr)
    if result.stderr:
        raise FormatterReportedWarningsError(result.stderr)
    return result.stdout


class FormatPipeline:
    """Turns a FormatRequest into an edit script, or a reason there is none.

    The pipeline never touches a document. Every failure is reported to the
    diagnostics stream and returned as a FAILED outcome; only an EDITS
    outcome should be applied by the caller.
    """

    def __init__(
        self,
        settings: SettingsLookup | None = None,
        executable_path: str | None = None,
        workspace_root: str | None = None,
        fallback_style: str = DEFAULT_FALLBACK_STYLE,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        diagnostics: TextIO | None = None,
        resolver: ConfigResolver | None = None,
        runner: ProcessRunner | None = None,
        diff_engine: DiffEngine | None = None,
    ) -> None:
        """executable_path overrides the settings lookup; workspace_root
        defaults to the current directory at request time."""
        self.settings: SettingsLookup = settings if settings is not None else EnvSettings()
        self.executable_path = executable_path
        self.workspace_root = workspace_root
        self.fallback_style = fallback_style
        self.timeout_seconds = timeout_seconds
        self.diagnostics = diagnostics
        self.resolver = resolver or ConfigResolver()
        self._runner = runner
        self.diff_engine = diff_engine or DiffEngine()

    @property
    def _sink(self) -> TextIO:
        return self.diagnostics if self.diagnostics is not None else sys.stderr

    def build_config(self, request: FormatRequest) -> FormatterConfig:
        """Read settings and locate the config file for this request.

        Raises:
            ExecutableError: If the executable is unset, missing or not runnable.
            ConfigNotFoundError: If no ancestor directory has a config file.
        """
        return self._config_for(request, self._checked_executable())

    def _checked_executable(self) -> str:
        executable = self.executable_path or clang_format_path(self.settings)
        check_executable(executable)
        return executable

    def _config_for(self, request: FormatRequest, executable: str) -> FormatterConfig:
        config_file = self.resolver.resolve(request.file_path)
        if config_file is None:
            raise ConfigNotFoundError(
                "Cannot find .clang-format or _clang-format configuration file under "
                f"any level parent directories of path ({request.file_path})."
            )

        return FormatterConfig(
            executable_path=executable,
            config_file_path=config_file,
            workspace_root=self.workspace_root or str(Path.cwd()),
            fallback_style=self.fallback_style,
            timeout_seconds=self.timeout_seconds,
        )

    def format(self, request: FormatRequest) -> FormatOutcome:
        """Run the pipeline for one request."""
        stage = PipelineStage.CHECKING_EXECUTABLE
        try:
            executable = self._checked_executable()

            stage = PipelineStage.RESOLVING_CONFIG
            config = self._config_for(request, executable)

            stage = PipelineStage.RUNNING_FORMATTER
            runner = self._runner or ProcessRunner(config.timeout_seconds)
            command = build_command(
                config.executable_path,
                request.file_path,
                config.fallback_style,
                request.selection,
            )
            result = runner.run(command, request.source_text, config.workspace_root)

            stage = PipelineStage.VALIDATING_OUTPUT
            new_source = validate_output(result)
        except CppStyleError as exc:
            return self._fail(stage, exc)

        if new_source == request.source_text:
            logger.debug("No formatting changes for %s", request.file_path)
            return FormatOutcome.no_change()

        edits = translate(self.diff_engine.diff(request.source_text, new_source))
        if not edits:
            return FormatOutcome.no_change()

        logger.debug("%d edits for %s", len(edits), request.file_path)
        return FormatOutcome.with_edits(edits, new_source)

    def format_text(
        self,
        source_text: str,
        file_path: str,
        selection: Selection | None = None,
    ) -> FormatOutcome:
        request = FormatRequest(
            source_text=source_text,
            file_path=file_path,
            selection=selection,
        )
        return self.format(request)

    def _fail(self, stage: PipelineStage, exc: CppStyleError) -> FormatOutcome:
        reason = next(
            reason for exc_type, reason in _FAILURE_REASONS if isinstance(exc, exc_type)
        )
        stderr = exc.stderr if isinstance(exc, FormatterOutputError) else None
        exit_code = exc.exit_code if isinstance(exc, FormatterNonzeroExitError) else None

        sink = self._sink
        if not isinstance(exc, FormatterReportedWarningsError):
            print(str(exc), file=sink)
        if stderr:
            print(stderr, file=sink)
        if isinstance(exc, ConfigNotFoundError):
            print("Not applying any formatting.", file=sink)

        logger.warning("Formatting failed at %s: %s", stage.value, reason.value)
        return FormatOutcome.failed(
            stage=stage,
            reason=reason,
            message=str(exc),
            stderr=stderr,
            exit_code=exit_code,
        )
