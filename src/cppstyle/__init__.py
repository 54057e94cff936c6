"""Apply clang-format to in-memory source as a minimal edit script."""

from cppstyle.formatter.pipeline import FormatPipeline, validate_output
from cppstyle.models import (
    DiffOp,
    EditKind,
    EditOp,
    FailureReason,
    FormatOutcome,
    FormatRequest,
    FormatterConfig,
    Operation,
    OutcomeStatus,
    PipelineStage,
    ProcessResult,
    Selection,
)
from cppstyle.utils import DiffEngine, apply_edits, compute_diff, translate

__all__ = [
    "DiffEngine",
    "DiffOp",
    "EditKind",
    "EditOp",
    "FailureReason",
    "FormatOutcome",
    "FormatPipeline",
    "FormatRequest",
    "FormatterConfig",
    "Operation",
    "OutcomeStatus",
    "PipelineStage",
    "ProcessResult",
    "Selection",
    "apply_edits",
    "compute_diff",
    "translate",
    "validate_output",
]
