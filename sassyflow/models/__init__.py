"""Data models module."""

from sassyflow.models.pipeline import (
    PARTIAL_PREFIX,
    SCSS_EXTENSION,
    BuildAction,
    CompileRequest,
    CompileResult,
    FileAction,
    SaveEvent,
    SourceDocument,
)

__all__ = [
    "PARTIAL_PREFIX",
    "SCSS_EXTENSION",
    "BuildAction",
    "CompileRequest",
    "CompileResult",
    "FileAction",
    "SaveEvent",
    "SourceDocument",
]
