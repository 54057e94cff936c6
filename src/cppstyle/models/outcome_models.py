"""Outcome of a format pipeline run."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from cppstyle.models.diff_models import EditOp


class PipelineStage(str, Enum):
    """Stage the pipeline was in when it finished."""

    CHECKING_EXECUTABLE = "checking_executable"
    RESOLVING_CONFIG = "resolving_config"
    RUNNING_FORMATTER = "running_formatter"
    VALIDATING_OUTPUT = "validating_output"
    DIFFING = "diffing"
    DONE = "done"


class OutcomeStatus(str, Enum):
    EDITS = "edits"
    NO_CHANGE = "no_change"
    FAILED = "failed"


class FailureReason(str, Enum):
    EXECUTABLE_NOT_CONFIGURED = "executable-not-configured"
    EXECUTABLE_MISSING = "executable-missing"
    EXECUTABLE_NOT_RUNNABLE = "executable-not-runnable"
    CONFIG_NOT_FOUND = "config-not-found"
    PROCESS_ERROR = "process-error"
    SOURCE_NOT_ENCODABLE = "source-not-encodable"
    STREAM_INTERRUPTED = "stream-interrupted"
    NONZERO_EXIT = "nonzero-exit"
    FORMATTER_REPORTED_WARNINGS = "formatter-reported-warnings"


class FormatOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    stage: PipelineStage
    reason: FailureReason | None = None
    edits: list[EditOp] = Field(default_factory=list)
    formatted_text: str | None = None
    message: str | None = None
    stderr: str | None = None
    exit_code: int | None = None

    @property
    def succeeded(self) -> bool:
        """True for both EDITS and NO_CHANGE."""
        return self.status != OutcomeStatus.FAILED

    @property
    def changed(self) -> bool:
        return self.status == OutcomeStatus.EDITS

    @classmethod
    def with_edits(cls, edits: list[EditOp], formatted_text: str) -> "FormatOutcome":
        return cls(
            status=OutcomeStatus.EDITS,
            stage=PipelineStage.DONE,
            edits=edits,
            formatted_text=formatted_text,
        )

    @classmethod
    def no_change(cls) -> "FormatOutcome":
        return cls(status=OutcomeStatus.NO_CHANGE, stage=PipelineStage.DONE)

    @classmethod
    def failed(
        cls,
        stage: PipelineStage,
        reason: FailureReason,
        message: str,
        stderr: str | None = None,
        exit_code: int | None = None,
    ) -> "FormatOutcome":
        return cls(
            status=OutcomeStatus.FAILED,
            stage=stage,
            reason=reason,
            message=message,
            stderr=stderr,
            exit_code=exit_code,
        )
