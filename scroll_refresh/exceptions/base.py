"""
Base Exception Classes
Provides the foundation for the exception hierarchy.
"""

import logging
from typing import Any

logger = logging.getLogger(__name__)


class RefreshCoordinatorError(Exception):
    """
    Base exception class for all scroll refresh errors.

    Every instance logs itself once, with its error code and context, when it
    is created.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        log_level: int = logging.ERROR,
    ):
        """
        Initialize base exception.

        Args:
            message: Technical error message for logging
            error_code: Optional code for programmatic handling (defaults to class name)
            context: Optional debugging details (offending key, signal name, ...)
            log_level: Level the error is logged at
        """
        super().__init__(message)
        self.error_code = error_code or self.__class__.__name__
        self.context = context or {}
        self.log_level = log_level

        suffix = f" | Context: {self.context}" if self.context else ""
        logger.log(self.log_level, f"[{self.error_code}] {message}{suffix}")

    def to_dict(self) -> dict[str, Any]:
        """Diagnostic representation, used in coordinator state summaries."""
        return {
            "error": self.error_code,
            "message": str(self),
            "context": self.context,
        }


class ValidationError(RefreshCoordinatorError):
    """Raised when an argument passed to the coordinator is invalid."""

    def __init__(self, message: str, field: str | None = None, value: Any = None, **kwargs: Any):
        context = kwargs.pop("context", {})
        if field:
            context["field"] = field
        if value is not None:
            context["value"] = str(value)

        super().__init__(message, context=context, **kwargs)
        self.field = field
        self.value = value


class ConfigurationError(RefreshCoordinatorError):
    """Raised when a refresh setting is invalid or missing."""

    def __init__(self, message: str, config_key: str | None = None, **kwargs: Any):
        context = kwargs.pop("context", {})
        if config_key:
            context["config_key"] = config_key

        super().__init__(message, context=context, **kwargs)
        self.config_key = config_key


class SignalError(RefreshCoordinatorError):
    """Recorded when a readiness signal resolves with a failure."""

    def __init__(self, message: str, signal_name: str | None = None, **kwargs: Any):
        context = kwargs.pop("context", {})
        if signal_name:
            context["signal"] = signal_name

        super().__init__(message, context=context, **kwargs)
        self.signal_name = signal_name
