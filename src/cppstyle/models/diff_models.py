"""Models for character diffs and the edit scripts derived from them."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Operation(str, Enum):
    EQUAL = "equal"
    INSERT = "insert"
    DELETE = "delete"


class DiffOp(BaseModel):
    """One run of a character diff between original and formatted text."""

    model_config = ConfigDict(frozen=True)

    operation: Operation
    text: str


class EditKind(str, Enum):
    INSERT = "insert"
    DELETE = "delete"


class EditOp(BaseModel):
    """Insert or delete expressed against the original document's offsets."""

    model_config = ConfigDict(frozen=True)

    kind: EditKind
    offset: int = Field(ge=0)
    text: str = ""    # INSERT only
    length: int = Field(default=0, ge=0)  # DELETE only

    @classmethod
    def insert(cls, offset: int, text: str) -> "EditOp":
        return cls(kind=EditKind.INSERT, offset=offset, text=text)

    @classmethod
    def delete(cls, offset: int, length: int) -> "EditOp":
        return cls(kind=EditKind.DELETE, offset=offset, length=length)

    @property
    def end(self) -> int:
        """Offset just past the original text this op touches."""
        if self.kind == EditKind.DELETE:
            return self.offset + self.length
        return self.offset
