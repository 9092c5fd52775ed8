"""
Exception hierarchy for closure_sim.

Every error raised on purpose by the package derives from :class:`ClosureSimError`
so callers can separate model-setup failures from programming errors in their own
code. The hierarchy follows the error taxonomy of the model-selection layer:

- :class:`ConfigurationError` for anything reachable through user-editable case
  configuration (unknown ``type`` tags, phases that are not part of an interface,
  missing or malformed keys). These abort setup.
- :class:`RegistrationError` for duplicate registrations. These surface at import
  time and are never caught inside the package.
- :class:`StateError` for ordering-contract violations such as reading a derived
  field before the operation that produces it has run.
- :class:`ComponentError` for unexpected failures while building a component.
- :class:`CommunicationError` for collective exchanges that cannot complete.
"""

from __future__ import annotations

import enum
import logging
import time
import uuid
from typing import Any, Dict, List, Optional

RECOVERY_SUGGESTION_MAX_LENGTH = 500

__all__ = [
    "ClosureSimError",
    "ValidationError",
    "ConfigurationError",
    "RegistrationError",
    "StateError",
    "ComponentError",
    "CommunicationError",
    "ErrorSeverity",
    "format_error_details",
]


class ErrorSeverity(enum.IntEnum):
    """Severity levels used to pick the log level of an error."""

    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4

    def get_description(self) -> str:
        descriptions = {
            ErrorSeverity.LOW: "Minor issue with suggested improvements",
            ErrorSeverity.MEDIUM: "Recoverable error",
            ErrorSeverity.HIGH: "Significant error requiring attention",
            ErrorSeverity.CRITICAL: "Fatal error, the run cannot continue",
        }
        return descriptions[self]


class ClosureSimError(Exception):
    """Base exception for all closure_sim errors.

    Args:
        message: Primary error description
        context: Optional dictionary of debugging context
        severity: Error severity, either an :class:`ErrorSeverity` or its name
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        severity: ErrorSeverity | str = ErrorSeverity.MEDIUM,
    ):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})
        if isinstance(severity, str):
            severity = ErrorSeverity[severity.upper()]
        self.severity = severity
        self.timestamp = time.time()
        self.error_id = str(uuid.uuid4())
        self.recovery_suggestion: Optional[str] = None
        self.logged = False

    def set_recovery_suggestion(self, suggestion: str) -> None:
        if len(suggestion) > RECOVERY_SUGGESTION_MAX_LENGTH:
            suggestion = suggestion[: RECOVERY_SUGGESTION_MAX_LENGTH - 3] + "..."
        self.recovery_suggestion = suggestion

    def add_context(self, key: str, value: Any) -> None:
        if not key or not isinstance(key, str):
            raise ValueError("Context key must be a non-empty string")
        self.context[key] = value

    def get_error_details(self) -> Dict[str, Any]:
        """Return a JSON-friendly summary of the error for logs and reports."""
        details = {
            "error_id": self.error_id,
            "message": self.message,
            "timestamp": self.timestamp,
            "severity": self.severity.name,
            "severity_description": self.severity.get_description(),
            "exception_type": self.__class__.__name__,
        }
        if self.context:
            details["context"] = dict(self.context)
        if self.recovery_suggestion:
            details["recovery_suggestion"] = self.recovery_suggestion
        return details

    def format_for_user(self, include_suggestions: bool = True) -> str:
        text = self.message
        if include_suggestions and self.recovery_suggestion:
            text += f"\n\nSuggestion: {self.recovery_suggestion}"
        return text

    def log_error(self, logger: Optional[logging.Logger] = None) -> None:
        """Log the error once at a level matching its severity."""
        if self.logged:
            return
        if logger is None:
            logger = logging.getLogger("closure_sim.exceptions")
        levels = {
            ErrorSeverity.LOW: logging.INFO,
            ErrorSeverity.MEDIUM: logging.WARNING,
            ErrorSeverity.HIGH: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL,
        }
        logger.log(levels[self.severity], "[%s] %s", self.error_id, self.message)
        self.logged = True


class ValidationError(ClosureSimError, ValueError):
    """Invalid argument values passed programmatically (shapes, sizes, ranges)."""

    def __init__(
        self,
        message: str,
        parameter_name: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        expected_format: Optional[str] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.MEDIUM)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value
        self.expected_format = expected_format
        if parameter_name and expected_format:
            self.set_recovery_suggestion(
                f"Provide {parameter_name} as {expected_format}"
            )


class ConfigurationError(ClosureSimError):
    """Invalid case configuration: unknown tags, missing keys, bad coefficients.

    Args:
        message: Primary error description naming the offending tag or key
        config_parameter: Name of the configuration key at fault
        parameter_value: Value found for that key
        valid_options: Mapping of acceptable values to short descriptions
    """

    def __init__(
        self,
        message: str,
        config_parameter: Optional[str] = None,
        parameter_value: Optional[Any] = None,
        valid_options: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.config_parameter = config_parameter
        self.parameter_value = parameter_value
        self.valid_options: Dict[str, Any] = dict(valid_options or {})
        self.validation_errors: List[str] = []

        if self.valid_options and self.config_parameter:
            options = sorted(self.valid_options)
            self.set_recovery_suggestion(
                f"Use one of {options} for '{self.config_parameter}'"
            )
        else:
            self.set_recovery_suggestion(
                "Check the case configuration against the model documentation"
            )

    def get_valid_options(self) -> Dict[str, Any]:
        return dict(self.valid_options)


class RegistrationError(ClosureSimError):
    """A model family, variant tag or registry object name was registered twice."""

    def __init__(self, message: str, family: Optional[str] = None, tag: Optional[str] = None):
        super().__init__(message, severity=ErrorSeverity.CRITICAL)
        self.family = family
        self.tag = tag


class StateError(ClosureSimError):
    """An operation was called out of its documented order.

    Args:
        message: Primary error description
        current_state: Description of the state the object was found in
        expected_state: Description of the state the operation requires
        component_name: Name of the object whose contract was violated
    """

    def __init__(
        self,
        message: str,
        current_state: Optional[str] = None,
        expected_state: Optional[str] = None,
        component_name: Optional[str] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.current_state = current_state
        self.expected_state = expected_state
        self.component_name = component_name
        if expected_state:
            self.set_recovery_suggestion(
                f"Call the producing operation first so the object is {expected_state}"
            )


class ComponentError(ClosureSimError):
    """Unexpected failure inside a component factory or operation."""

    def __init__(
        self,
        message: str,
        component_name: str,
        operation_name: Optional[str] = None,
        underlying_error: Optional[Exception] = None,
    ):
        super().__init__(message, severity=ErrorSeverity.HIGH)
        self.component_name = component_name
        self.operation_name = operation_name
        self.underlying_error = underlying_error
        self.set_recovery_suggestion(
            f"Check the inputs passed to {component_name}"
        )

    def diagnose_failure(self) -> Dict[str, Any]:
        report: Dict[str, Any] = {
            "component_name": self.component_name,
            "operation_name": self.operation_name,
            "failure_timestamp": self.timestamp,
        }
        if self.underlying_error is not None:
            report["root_cause"] = {
                "error_type": type(self.underlying_error).__name__,
                "error_message": str(self.underlying_error),
            }
        return report


class CommunicationError(ClosureSimError):
    """A collective exchange between ranks did not complete."""

    def __init__(self, message: str, rank: Optional[int] = None):
        super().__init__(message, severity=ErrorSeverity.CRITICAL)
        self.rank = rank


def format_error_details(error: BaseException) -> str:
    """Render any exception as a one-line summary suitable for CLI output."""
    if isinstance(error, ClosureSimError):
        parts = [f"{error.__class__.__name__}: {error.message}"]
        if error.recovery_suggestion:
            parts.append(f"({error.recovery_suggestion})")
        return " ".join(parts)
    return f"{error.__class__.__name__}: {error}"
