"""
Core Architecture Components

Key Components:
- RefreshCoordinator: readiness gate with debounced layout recompute
- Debouncer / Scheduler: cancel-and-reschedule timers on the host event loop
- ReadinessSignal: one-shot readiness notifications
- ConfigManager: layered configuration with change notification
"""

from .config_manager import ConfigManager, RefreshSettings
from .coordinator import CoordinatorPhase, CoordinatorState, RefreshCoordinator
from .scheduling import AsyncioScheduler, Debouncer, Scheduler, TimerHandle
from .signals import ReadinessSignal, already_ready, load_event_signal, signal_from_awaitable

__all__ = [
    "AsyncioScheduler",
    "ConfigManager",
    "CoordinatorPhase",
    "CoordinatorState",
    "Debouncer",
    "ReadinessSignal",
    "RefreshCoordinator",
    "RefreshSettings",
    "Scheduler",
    "TimerHandle",
    "already_ready",
    "load_event_signal",
    "signal_from_awaitable",
]
