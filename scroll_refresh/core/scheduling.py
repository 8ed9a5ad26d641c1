"""
Timer Scheduling and Debounce

The coordinator never blocks; every delayed action goes through a ``Scheduler``
supplied by the host event loop. ``Debouncer`` keeps at most one outstanding
timer and replaces it on every new trigger (last-request-wins).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Optional, Protocol

from scroll_refresh.exceptions import ValidationError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    """A scheduled, not yet fired, callback."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Timer facility of a single-threaded event loop."""

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle: ...


class AsyncioScheduler:
    """Scheduler backed by an asyncio event loop."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        # Resolved lazily so the scheduler can be built before the loop runs.
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> asyncio.TimerHandle:
        return self.loop.call_later(delay, callback)


class Debouncer:
    """
    Coalesce a burst of triggers into one delayed run of ``action``.

    Each ``trigger()`` cancels the pending timer (if any) and schedules a new
    one ``delay_ms`` later, so only the last trigger of a burst executes.
    ``flush()`` cancels the pending timer and runs the action immediately.
    Exceptions raised by ``action`` are not caught here.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        delay_ms: int,
        action: Callable[[], None],
        max_delay_ms: Optional[int] = None,
    ):
        self._scheduler = scheduler
        self._action = action
        self._handle: Optional[TimerHandle] = None
        self.max_delay_ms = max_delay_ms
        self._delay_ms = self._validate_delay(delay_ms)

    def _validate_delay(self, delay_ms: int) -> int:
        if isinstance(delay_ms, bool) or not isinstance(delay_ms, (int, float)):
            raise ValidationError(
                "Debounce delay must be a number of milliseconds",
                field="delay_ms",
                value=delay_ms,
            )
        if delay_ms < 0:
            raise ValidationError(
                "Debounce delay cannot be negative",
                field="delay_ms",
                value=delay_ms,
            )
        if self.max_delay_ms is not None and delay_ms > self.max_delay_ms:
            raise ValidationError(
                f"Debounce delay exceeds maximum of {self.max_delay_ms}ms",
                field="delay_ms",
                value=delay_ms,
            )
        return int(delay_ms)

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, value: int) -> None:
        # Takes effect on the next trigger; a pending timer keeps its delay.
        self._delay_ms = self._validate_delay(value)

    @property
    def pending(self) -> bool:
        """True while a scheduled run has not fired or been cancelled."""
        return self._handle is not None

    def trigger(self) -> None:
        """Cancel any pending run and schedule a new one."""
        self.cancel()
        self._handle = self._scheduler.call_later(self._delay_ms / 1000.0, self._fire)

    def cancel(self) -> bool:
        """Cancel the pending run. Returns True if one was pending."""
        if self._handle is None:
            return False
        self._handle.cancel()
        self._handle = None
        return True

    def flush(self) -> None:
        """Cancel the pending run (if any) and run the action now."""
        if self.cancel():
            logger.debug("Pending debounced run superseded by flush")
        self._action()

    def _fire(self) -> None:
        self._handle = None
        self._action()
