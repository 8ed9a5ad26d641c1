"""
Qt Host Integration

Adapters that let the refresh coordinator run on a PyQt6 event loop:
timers via QTimer, readiness from Qt signals, and recompute requests from
widget resize events.
"""

import logging
from typing import Optional

from PyQt6.QtCore import QEvent, QObject, QTimer
from PyQt6.QtWidgets import QWidget

from scroll_refresh.core.coordinator import RefreshCoordinator
from scroll_refresh.core.signals import ReadinessSignal

logger = logging.getLogger(__name__)


class QtTimerHandle:
    """Cancellable handle for a single-shot QTimer."""

    def __init__(self, timer: QTimer, owner: "QtScheduler"):
        self._timer = timer
        self._owner = owner

    def cancel(self) -> None:
        self._owner._discard(self._timer)


class QtScheduler:
    """Scheduler backed by single-shot QTimers on the Qt event loop."""

    def __init__(self, parent: Optional[QObject] = None):
        self._parent = parent
        # Keeps parentless timers alive until they fire or are cancelled.
        self._timers: set[QTimer] = set()

    def call_later(self, delay: float, callback) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)

        def _fire():
            self._discard(timer)
            callback()

        timer.timeout.connect(_fire)
        self._timers.add(timer)
        timer.start(max(0, int(round(delay * 1000))))
        return QtTimerHandle(timer, self)

    def active_timers(self) -> int:
        return len(self._timers)

    def _discard(self, timer: QTimer) -> None:
        if timer in self._timers:
            self._timers.remove(timer)
            timer.stop()
            timer.deleteLater()


def signal_from_qt(bound_signal, name: str) -> ReadinessSignal:
    """
    Readiness signal that is set by the first emission of a Qt signal.

    Args:
        bound_signal: A bound pyqtSignal (e.g. ``loader.finished``)
        name: Name used in logs
    """
    readiness = ReadinessSignal(name)

    def _on_emit(*_args) -> None:
        bound_signal.disconnect(_on_emit)
        readiness.set()

    bound_signal.connect(_on_emit)
    return readiness


class ResizeRefreshFilter(QObject):
    """Request a debounced recompute whenever a watched widget resizes or shows."""

    WATCHED_EVENTS = (QEvent.Type.Resize, QEvent.Type.Show)

    def __init__(self, coordinator: RefreshCoordinator, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._coordinator = coordinator
        self._watched: set[int] = set()

    def watch(self, widget: QWidget) -> None:
        wid = id(widget)
        if wid not in self._watched:
            self._watched.add(wid)
            widget.installEventFilter(self)
            logger.debug(f"Watching {widget.__class__.__name__} for layout changes")

    def unwatch(self, widget: QWidget) -> None:
        wid = id(widget)
        if wid in self._watched:
            self._watched.discard(wid)
            widget.removeEventFilter(self)

    def watched_count(self) -> int:
        return len(self._watched)

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: N802
        if id(obj) in self._watched and event.type() in self.WATCHED_EVENTS:
            self._coordinator.request_recompute()
        return super().eventFilter(obj, event)
