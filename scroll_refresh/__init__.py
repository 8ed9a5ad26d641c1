"""
Scroll Refresh

Deferred-readiness coordination for scroll-driven layouts: wait for fonts and
resources, then batch layout recompute requests.
"""

from .application import RefreshContext, create_refresh_context
from .core import (
    AsyncioScheduler,
    ConfigManager,
    Debouncer,
    ReadinessSignal,
    RefreshCoordinator,
    already_ready,
    load_event_signal,
    signal_from_awaitable,
)

__version__ = "0.1.0"

__all__ = [
    "AsyncioScheduler",
    "ConfigManager",
    "Debouncer",
    "ReadinessSignal",
    "RefreshContext",
    "RefreshCoordinator",
    "already_ready",
    "create_refresh_context",
    "load_event_signal",
    "signal_from_awaitable",
]
