"""Contract enforcement tests for exception classes.

These tests prevent accidental API changes to the exception hierarchy that
callers and the CLI rely on.
"""

import inspect

import pytest

from closure_sim.utils.exceptions import (
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


def _params(cls):
    return list(inspect.signature(cls.__init__).parameters)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            ValidationError,
            ConfigurationError,
            RegistrationError,
            StateError,
            ComponentError,
            CommunicationError,
        ],
    )
    def test_all_derive_from_base(self, cls):
        assert issubclass(cls, ClosureSimError)

    def test_validation_error_is_value_error(self):
        assert issubclass(ValidationError, ValueError)

    def test_configuration_error_is_not_value_error(self):
        # configuration problems must not be swallowed by generic ValueError handlers
        assert not issubclass(ConfigurationError, ValueError)


class TestConfigurationErrorContract:
    def test_signature_is_stable(self):
        assert _params(ConfigurationError) == [
            "self",
            "message",
            "config_parameter",
            "parameter_value",
            "valid_options",
        ]

    def test_only_message_is_required(self):
        error = ConfigurationError("bad")
        assert error.config_parameter is None
        assert error.parameter_value is None
        assert error.get_valid_options() == {}
        assert error.validation_errors == []

    def test_valid_options_drive_recovery_suggestion(self):
        error = ConfigurationError(
            "Unknown type",
            config_parameter="type",
            parameter_value="nope",
            valid_options={"b": "", "a": ""},
        )
        assert "['a', 'b']" in error.recovery_suggestion
        assert error.severity is ErrorSeverity.HIGH


class TestStateErrorContract:
    def test_signature_is_stable(self):
        assert _params(StateError) == [
            "self",
            "message",
            "current_state",
            "expected_state",
            "component_name",
        ]

    def test_stores_states(self):
        error = StateError("early", current_state="a", expected_state="b", component_name="m")
        assert (error.current_state, error.expected_state, error.component_name) == (
            "a",
            "b",
            "m",
        )


class TestComponentErrorContract:
    def test_signature_is_stable(self):
        assert _params(ComponentError) == [
            "self",
            "message",
            "component_name",
            "operation_name",
            "underlying_error",
        ]

    def test_diagnose_failure_reports_root_cause(self):
        error = ComponentError(
            "failed", component_name="heatTransferModel.Gunn", underlying_error=KeyError("x")
        )
        report = error.diagnose_failure()
        assert report["component_name"] == "heatTransferModel.Gunn"
        assert report["root_cause"]["error_type"] == "KeyError"


class TestRegistrationErrorContract:
    def test_is_critical(self):
        error = RegistrationError("dup", family="XiModel", tag="uniformConstant")
        assert error.severity is ErrorSeverity.CRITICAL
        assert (error.family, error.tag) == ("XiModel", "uniformConstant")


class TestBaseBehaviour:
    def test_error_details_are_serialisable_summary(self):
        error = ClosureSimError("msg", context={"cell": 3}, severity="low")
        details = error.get_error_details()
        assert details["severity"] == "LOW"
        assert details["context"] == {"cell": 3}
        assert details["exception_type"] == "ClosureSimError"

    def test_add_context_rejects_empty_key(self):
        with pytest.raises(ValueError):
            ClosureSimError("msg").add_context("", 1)

    def test_log_error_logs_once(self, caplog):
        error = ConfigurationError("once")
        with caplog.at_level("WARNING"):
            error.log_error()
            error.log_error()
        assert sum("once" in r.getMessage() for r in caplog.records) == 1

    def test_format_error_details(self):
        assert format_error_details(KeyError("k")).startswith("KeyError")
        text = format_error_details(ConfigurationError("bad", config_parameter="x"))
        assert text.startswith("ConfigurationError: bad")

    def test_communication_error_carries_rank(self):
        assert CommunicationError("timeout", rank=1).rank == 1
