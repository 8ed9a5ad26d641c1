"""Shared pytest configuration for the scroll refresh test suite."""

from __future__ import annotations

import os

# Qt widgets in tests run without a display.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QSettings

from scroll_refresh.core.config_manager import ConfigManager
from scroll_refresh.core.signals import ReadinessSignal


class FakeTimer:
    def __init__(self, due_ms: int, callback):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class FakeScheduler:
    """Deterministic scheduler driven by a manual millisecond clock."""

    def __init__(self):
        self.now_ms = 0
        self.timers: list[FakeTimer] = []

    def call_later(self, delay: float, callback) -> FakeTimer:
        timer = FakeTimer(self.now_ms + int(round(delay * 1000)), callback)
        self.timers.append(timer)
        return timer

    def pending(self) -> int:
        return sum(1 for t in self.timers if not t.cancelled)

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = [t for t in self.timers if not t.cancelled and t.due_ms <= target]
            if not due:
                break
            timer = min(due, key=lambda t: t.due_ms)
            self.timers.remove(timer)
            self.now_ms = timer.due_ms
            timer.callback()
        self.now_ms = target


class RecomputeRecorder:
    """Stand-in for the layout engine's refresh entry point."""

    def __init__(self, scheduler: FakeScheduler | None = None):
        self.calls: list[int] = []
        self._scheduler = scheduler

    def __call__(self) -> None:
        self.calls.append(self._scheduler.now_ms if self._scheduler else len(self.calls))

    @property
    def count(self) -> int:
        return len(self.calls)


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def recompute(scheduler) -> RecomputeRecorder:
    return RecomputeRecorder(scheduler)


@pytest.fixture
def fonts_signal() -> ReadinessSignal:
    return ReadinessSignal("fonts")


@pytest.fixture
def resources_signal() -> ReadinessSignal:
    return ReadinessSignal("resources")


@pytest.fixture
def qsettings(tmp_path) -> QSettings:
    """INI-backed QSettings isolated to the test's temp directory."""
    return QSettings(str(tmp_path / "settings.ini"), QSettings.Format.IniFormat)


@pytest.fixture
def config_manager(qsettings) -> ConfigManager:
    return ConfigManager(settings=qsettings)
