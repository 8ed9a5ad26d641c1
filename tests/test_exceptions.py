"""
Tests for the exception hierarchy.
"""

import logging

from scroll_refresh.exceptions import (
    ConfigurationError,
    RefreshCoordinatorError,
    SignalError,
    ValidationError,
)


def test_base_error_logs_and_serializes(caplog):
    with caplog.at_level(logging.ERROR):
        error = RefreshCoordinatorError("something broke", context={"phase": "waiting"})

    assert "[RefreshCoordinatorError] something broke | Context: {'phase': 'waiting'}" in caplog.text
    assert error.to_dict() == {
        "error": "RefreshCoordinatorError",
        "message": "something broke",
        "context": {"phase": "waiting"},
    }


def test_configuration_error_records_key():
    error = ConfigurationError("bad delay", config_key="refresh.debounce_ms")

    assert error.config_key == "refresh.debounce_ms"
    assert error.context == {"config_key": "refresh.debounce_ms"}
    assert isinstance(error, RefreshCoordinatorError)


def test_validation_error_fields(caplog):
    with caplog.at_level(logging.WARNING):
        error = ValidationError("must be callable", field="callback", value=42, log_level=logging.WARNING)

    assert error.field == "callback"
    assert error.context == {"field": "callback", "value": "42"}
    assert error.log_level == logging.WARNING
    assert caplog.records[-1].levelno == logging.WARNING


def test_signal_error_code_and_context():
    error = SignalError("fonts failed", signal_name="fonts", error_code="FONTS_FAILED")

    assert error.error_code == "FONTS_FAILED"
    assert error.signal_name == "fonts"
    assert error.to_dict()["context"] == {"signal": "fonts"}
