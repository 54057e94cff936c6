"""Models describing a single format invocation."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FALLBACK_STYLE = "Google"
DEFAULT_TIMEOUT_SECONDS = 30.0


class Selection(BaseModel):
    """Sub-range of the document handed to clang-format as -offset/-length."""

    model_config = ConfigDict(frozen=True)

    offset: int = Field(ge=0)
    length: int = Field(ge=0)


class FormatRequest(BaseModel):
    """Immutable snapshot of the text to format."""

    model_config = ConfigDict(frozen=True)

    source_text: str
    file_path: str  # Absolute path; used for config lookup and -assume-filename
    selection: Selection | None = None

    @field_validator("file_path")
    @classmethod
    def _require_absolute(cls, value: str) -> str:
        if not Path(value).is_absolute():
            raise ValueError(f"file_path must be absolute: {value}")
        return value


class FormatterConfig(BaseModel):
    """Formatter settings read fresh for one request."""

    model_config = ConfigDict(frozen=True)

    executable_path: str
    config_file_path: str | None = None
    workspace_root: str
    fallback_style: str = DEFAULT_FALLBACK_STYLE
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS


class ProcessResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: str
    stderr: str

    @property
    def usable(self) -> bool:
        """stdout is only trusted on a clean exit with nothing on stderr."""
        return self.exit_code == 0 and not self.stderr
