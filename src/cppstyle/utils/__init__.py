"""Diff and edit utilities for cppstyle."""

from cppstyle.utils.diff_engine import DiffEngine, compute_diff
from cppstyle.utils.edit_translator import apply_edits, translate

__all__ = [
    "DiffEngine",
    "apply_edits",
    "compute_diff",
    "translate",
]
