"""Shared utilities: the exception hierarchy used across closure_sim."""

from .exceptions import (
    ClosureSimError,
    CommunicationError,
    ComponentError,
    ConfigurationError,
    ErrorSeverity,
    RegistrationError,
    StateError,
    ValidationError,
    format_error_details,
)

__all__ = [
    "ClosureSimError",
    "CommunicationError",
    "ComponentError",
    "ConfigurationError",
    "ErrorSeverity",
    "RegistrationError",
    "StateError",
    "ValidationError",
    "format_error_details",
]
