"""Translate diffs into offset-based edit scripts and apply them."""

from cppstyle.exceptions import EditApplicationError
from cppstyle.models.diff_models import DiffOp, EditKind, EditOp, Operation


def translate(diffs: list[DiffOp]) -> list[EditOp]:
    """Convert a DiffOp sequence into insert/delete edits.

    Offsets index into the original text and are never shifted by earlier
    edits: EQUAL and DELETE runs advance the offset, INSERT runs do not,
    because inserted text occupies no space in the original.

    Args:
        diffs: Output of DiffEngine.diff().

    Returns:
        Ordered EditOp list. Empty when the diff contains no changes.
    """
    offset = 0
    edits: list[EditOp] = []

    for d in diffs:
        if d.operation == Operation.EQUAL:
            offset += len(d.text)
        elif d.operation == Operation.INSERT:
            edits.append(EditOp.insert(offset, d.text))
        else:
            edits.append(EditOp.delete(offset, len(d.text)))
            offset += len(d.text)

    return edits


def apply_edits(original: str, edits: list[EditOp]) -> str:
    """Apply an edit script produced by translate() to the original text.

    Every offset is checked against the original before anything is built,
    so a bad script leaves the caller's text untouched.

    Args:
        original: The document text the script was computed against.
        edits: Ordered edit list in original coordinates.

    Returns:
        The edited text.

    Raises:
        EditApplicationError: If an edit is out of bounds or out of order.
    """
    size = len(original)
    cursor = 0
    parts: list[str] = []

    for index, edit in enumerate(edits):
        if edit.offset < cursor or edit.end > size:
            raise EditApplicationError(
                f"Edit {index} ({edit.kind.value} at {edit.offset}) does not fit "
                f"document of length {size} after offset {cursor}"
            )
        parts.append(original[cursor:edit.offset])
        if edit.kind == EditKind.INSERT:
            parts.append(edit.text)
        cursor = edit.end

    parts.append(original[cursor:])
    return "".join(parts)
