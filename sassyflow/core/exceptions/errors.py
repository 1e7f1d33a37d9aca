"""Custom exception definitions for SassyFlow."""

from pathlib import Path
from typing import Any


class SassyFlowError(Exception):
    """Base exception for all SassyFlow errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Error message.
            details: Additional error details.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(SassyFlowError):
    """Exception raised for configuration errors."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message.
            config_key: Configuration key that caused the error.
            details: Additional error details.
        """
        details = details or {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)


class BackendUnavailableError(SassyFlowError):
    """Raised when no compiler backend can be selected for a document."""


class CompileError(SassyFlowError):
    """Exception raised when a backend fails to compile a document."""

    def __init__(
        self,
        message: str,
        source_file: Path | str | None = None,
        return_code: int | None = None,
        output: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize compile error.

        Args:
            message: Error message.
            source_file: Stylesheet that failed to compile.
            return_code: Exit code of the compiler process, if any.
            output: Captured compiler output.
            details: Additional error details.
        """
        details = details or {}
        if source_file:
            details["source_file"] = str(source_file)
        if return_code is not None:
            details["return_code"] = return_code
        super().__init__(message, details)
        self.return_code = return_code
        self.output = output or ""


class MinifyError(SassyFlowError):
    """Exception raised when generated CSS cannot be minified."""


class RegistrationError(SassyFlowError):
    """Exception raised when a generated file cannot be registered."""

    def __init__(
        self,
        message: str,
        parent: Path | str | None = None,
        child: Path | str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize registration error.

        Args:
            message: Error message.
            parent: File the output was to be nested under.
            child: Generated file being registered.
            details: Additional error details.
        """
        details = details or {}
        if parent:
            details["parent"] = str(parent)
        if child:
            details["child"] = str(child)
        super().__init__(message, details)
