"""Data models flowing through the save-triggered build pipeline."""

from datetime import datetime
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

# Stylesheet source extension, compared case-insensitively
SCSS_EXTENSION = ".scss"

# Base-name prefix marking an include-only (partial) document
PARTIAL_PREFIX = "_"


class FileAction(str, Enum):
    """Kind of file notification delivered by the editor."""

    CONTENT_SAVED = "content_saved"
    CONTENT_LOADED = "content_loaded"
    RENAMED = "renamed"


class BuildAction(str, Enum):
    """How a registered file participates in the host project build."""

    CONTENT = "content"
    NONE = "none"


class SaveEvent(BaseModel):
    """A file notification from the editor."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Path of the saved file")
    saved_at: datetime = Field(
        default_factory=lambda: datetime.now().astimezone(),
        description="When the editor wrote the file",
    )
    action: FileAction = Field(
        default=FileAction.CONTENT_SAVED,
        description="Kind of file action",
    )

    @property
    def is_save(self) -> bool:
        """Whether the event reports content written to disk."""
        return self.action == FileAction.CONTENT_SAVED


class SourceDocument(BaseModel):
    """A stylesheet source file."""

    model_config = ConfigDict(frozen=True)

    path: Path

    @property
    def is_partial(self) -> bool:
        """Partial documents are only compiled through their root documents."""
        return self.path.name.startswith(PARTIAL_PREFIX)

    @property
    def is_stylesheet(self) -> bool:
        return self.path.suffix.lower() == SCSS_EXTENSION

    @property
    def is_root(self) -> bool:
        return self.is_stylesheet and not self.is_partial


class CompileRequest(BaseModel):
    """One root document that needs a build."""

    model_config = ConfigDict(frozen=True)

    document: SourceDocument
    requested_at: datetime = Field(
        description="Save time of the triggering event, used for staleness checks",
    )

    @property
    def path(self) -> Path:
        return self.document.path


class CompileResult(BaseModel):
    """Outcome of executing a CompileRequest.

    ``error`` may co-occur with ``output_path`` when the output was replaced
    with an error comment.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    source_path: Path
    backend: str | None = None
    output_path: Path | None = None
    minified_path: Path | None = None
    error: Exception | None = None
    registered: list[Path] = Field(default_factory=list)
    skipped: bool = False
    skip_reason: str | None = None

    @property
    def success(self) -> bool:
        return not self.skipped and self.error is None
