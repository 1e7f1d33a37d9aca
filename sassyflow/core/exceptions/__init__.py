"""Exception definitions module."""

from sassyflow.core.exceptions.errors import (
    BackendUnavailableError,
    CompileError,
    ConfigurationError,
    MinifyError,
    RegistrationError,
    SassyFlowError,
)

__all__ = [
    "SassyFlowError",
    "ConfigurationError",
    "BackendUnavailableError",
    "CompileError",
    "MinifyError",
    "RegistrationError",
]
