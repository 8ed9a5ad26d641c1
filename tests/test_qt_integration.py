"""
Tests for the PyQt6 host adapters.
"""

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QWidget

from scroll_refresh.core.coordinator import RefreshCoordinator
from scroll_refresh.core.signals import already_ready
from scroll_refresh.qt_integration import QtScheduler, ResizeRefreshFilter, signal_from_qt


class _FontLoader(QObject):
    finished = pyqtSignal()


class TestQtScheduler:
    def test_timer_fires(self, qtbot):
        runs = []
        scheduler = QtScheduler()

        scheduler.call_later(0.01, lambda: runs.append(1))

        qtbot.waitUntil(lambda: runs == [1], timeout=1000)
        assert scheduler.active_timers() == 0

    def test_cancelled_timer_never_fires(self, qtbot):
        runs = []
        scheduler = QtScheduler()

        handle = scheduler.call_later(0.01, lambda: runs.append(1))
        handle.cancel()
        handle.cancel()
        qtbot.wait(50)

        assert runs == []
        assert scheduler.active_timers() == 0


class TestQtSignal:
    def test_first_emission_sets_signal(self, qtbot):
        loader = _FontLoader()
        fired = []
        readiness = signal_from_qt(loader.finished, "fonts")
        readiness.subscribe(lambda: fired.append(True))

        loader.finished.emit()
        loader.finished.emit()

        assert readiness.is_set
        assert fired == [True]


class TestResizeRefreshFilter:
    def _coordinator(self, recompute):
        return RefreshCoordinator(
            recompute=recompute,
            wait_for_fonts=lambda: already_ready("fonts"),
            wait_for_resources=lambda: already_ready("resources"),
            scheduler=QtScheduler(),
            debounce_ms=50,
        )

    def test_resize_burst_coalesces(self, qtbot):
        calls = []
        coordinator = self._coordinator(lambda: calls.append(1))
        coordinator.reset_refresh_count()
        widget = QWidget()
        qtbot.addWidget(widget)
        refresh_filter = ResizeRefreshFilter(coordinator)
        refresh_filter.watch(widget)
        refresh_filter.watch(widget)
        widget.show()

        for width in (300, 320, 340, 360):
            widget.resize(width, 200)

        qtbot.waitUntil(lambda: coordinator.get_refresh_count() == 1, timeout=1000)
        qtbot.wait(60)
        assert coordinator.get_refresh_count() == 1
        assert refresh_filter.watched_count() == 1

    def test_unwatched_widget_is_ignored(self, qtbot):
        coordinator = self._coordinator(lambda: None)
        coordinator.reset_refresh_count()
        widget = QWidget()
        qtbot.addWidget(widget)
        refresh_filter = ResizeRefreshFilter(coordinator)
        refresh_filter.watch(widget)
        refresh_filter.unwatch(widget)

        widget.show()
        widget.resize(500, 400)
        qtbot.wait(60)

        assert coordinator.get_refresh_count() == 0
        assert refresh_filter.watched_count() == 0
