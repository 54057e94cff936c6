"""Data models for cppstyle."""

from cppstyle.models.diff_models import DiffOp, EditKind, EditOp, Operation
from cppstyle.models.format_models import (
    DEFAULT_FALLBACK_STYLE,
    DEFAULT_TIMEOUT_SECONDS,
    FormatRequest,
    FormatterConfig,
    ProcessResult,
    Selection,
)
from cppstyle.models.outcome_models import (
    FailureReason,
    FormatOutcome,
    OutcomeStatus,
    PipelineStage,
)

__all__ = [
    "DEFAULT_FALLBACK_STYLE",
    "DEFAULT_TIMEOUT_SECONDS",
    "DiffOp",
    "EditKind",
    "EditOp",
    "FailureReason",
    "FormatOutcome",
    "FormatRequest",
    "FormatterConfig",
    "Operation",
    "OutcomeStatus",
    "PipelineStage",
    "ProcessResult",
    "Selection",
]
