"""
Exception Hierarchy for Scroll Refresh
Provides standardized error handling with consistent exception types.
"""

from .base import (
    ConfigurationError,
    RefreshCoordinatorError,
    SignalError,
    ValidationError,
)

__all__ = [
    "RefreshCoordinatorError",
    "ValidationError",
    "ConfigurationError",
    "SignalError",
]
