"""Character-level diff between original and formatted source."""

from diff_match_patch import diff_match_patch

from cppstyle.models.diff_models import DiffOp, Operation

DEFAULT_EDIT_COST = 4

_OPERATIONS = {
    diff_match_patch.DIFF_EQUAL: Operation.EQUAL,
    diff_match_patch.DIFF_INSERT: Operation.INSERT,
    diff_match_patch.DIFF_DELETE: Operation.DELETE,
}


class DiffEngine:
    """Computes a cleaned-up character diff with diff-match-patch.

    The raw Myers diff is passed through ``diff_cleanupEfficiency``, which
    folds short EQUAL runs sitting between edits into the surrounding
    insert/delete pair. Formatter output tends to produce many one-character
    whitespace changes, so this keeps the edit script short.
    """

    def __init__(self, edit_cost: int = DEFAULT_EDIT_COST) -> None:
        self._dmp = diff_match_patch()
        # No deadline: the result must depend only on the inputs
        self._dmp.Diff_Timeout = 0
        self._dmp.Diff_EditCost = edit_cost

    def diff(self, original: str, formatted: str) -> list[DiffOp]:
        """Diff two strings.

        Args:
            original: Text currently in the document.
            formatted: Text produced by the formatter.

        Returns:
            Ordered DiffOp list. Only EQUAL ops (or none) when the inputs match.
        """
        raw = self._dmp.diff_main(original, formatted)
        self._dmp.diff_cleanupEfficiency(raw)
        return [
            DiffOp(operation=_OPERATIONS[op], text=text)
            for op, text in raw
            if text
        ]


def compute_diff(original: str, formatted: str) -> list[DiffOp]:
    """Diff with the default edit cost."""
    return DiffEngine().diff(original, formatted)
