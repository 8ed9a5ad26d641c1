"""
Readiness Signals

One-shot notifications that a precondition has been met (fonts loaded,
page resources loaded). A signal resolves at most once, either as set or as
failed; later resolutions are ignored. Subscribers registered after
resolution are called synchronously.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Optional

logger = logging.getLogger(__name__)

ErrorCallback = Callable[[BaseException], None]


class ReadinessSignal:
    """One-shot readiness notification."""

    def __init__(self, name: str):
        self.name = name
        self._is_set = False
        self._error: Optional[BaseException] = None
        self._subscribers: list[tuple[Callable[[], None], Optional[ErrorCallback]]] = []

    def __repr__(self) -> str:
        if self._is_set:
            status = "set"
        elif self._error is not None:
            status = "failed"
        else:
            status = "pending"
        return f"<ReadinessSignal {self.name!r} {status}>"

    @property
    def is_set(self) -> bool:
        return self._is_set

    @property
    def error(self) -> Optional[BaseException]:
        return self._error

    @property
    def resolved(self) -> bool:
        return self._is_set or self._error is not None

    def set(self) -> bool:
        """
        Mark the signal as ready and notify subscribers in subscription order.

        Every subscriber is called even if an earlier one raises; the first
        error is re-raised once all of them have run.

        Returns:
            True if this call resolved the signal, False if it was already resolved
        """
        if self.resolved:
            return False
        self._is_set = True
        subscribers, self._subscribers = self._subscribers, []
        logger.debug(f"Readiness signal '{self.name}' set ({len(subscribers)} subscribers)")
        self._notify([on_set for on_set, _ in subscribers])
        return True

    def fail(self, error: BaseException) -> bool:
        """
        Resolve the signal as failed. Subscribers without an error callback
        are dropped; the signal never becomes set afterwards.
        """
        if self.resolved:
            return False
        self._error = error
        subscribers, self._subscribers = self._subscribers, []
        logger.debug(f"Readiness signal '{self.name}' failed: {error!r}")
        self._notify([
            (lambda cb=on_error: cb(error)) for _, on_error in subscribers if on_error is not None
        ])
        return True

    def _notify(self, callbacks: list[Callable[[], None]]) -> None:
        first_error: Optional[Exception] = None
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.error(f"Subscriber of '{self.name}' failed: {e}")
        if first_error is not None:
            raise first_error

    def subscribe(
        self,
        on_set: Callable[[], None],
        on_error: Optional[ErrorCallback] = None,
    ) -> None:
        """Call ``on_set`` once the signal is set (immediately if it already is)."""
        if self._is_set:
            on_set()
        elif self._error is not None:
            if on_error is not None:
                on_error(self._error)
        else:
            self._subscribers.append((on_set, on_error))


def already_ready(name: str) -> ReadinessSignal:
    """Signal for a condition the host already knows to be met."""
    signal = ReadinessSignal(name)
    signal.set()
    return signal


def signal_from_awaitable(
    awaitable: Awaitable[Any],
    name: str,
    loop: Optional[asyncio.AbstractEventLoop] = None,
) -> ReadinessSignal:
    """
    Wrap an awaitable (future, task or coroutine) as a readiness signal.

    The signal is set when the awaitable completes and fails if it raises or
    is cancelled. Completion is observed through a done-callback, so even an
    already finished future resolves the signal on a later loop iteration.
    Must be called with a running loop unless ``loop`` is given.
    """
    if loop is None:
        loop = asyncio.get_running_loop()
    future = asyncio.ensure_future(awaitable, loop=loop)
    signal = ReadinessSignal(name)

    def _on_done(fut: asyncio.Future) -> None:
        if fut.cancelled():
            signal.fail(asyncio.CancelledError(f"'{name}' awaitable was cancelled"))
            return
        exc = fut.exception()
        if exc is not None:
            signal.fail(exc)
        else:
            signal.set()

    future.add_done_callback(_on_done)
    return signal


def load_event_signal(
    already_loaded: Callable[[], bool],
    add_load_listener: Callable[[Callable[[], None]], Any],
    name: str = "resources",
) -> ReadinessSignal:
    """
    Build a signal from a synchronous "already loaded?" check plus a load event.

    ``already_loaded`` is consulted once, right now. If it reports True the
    signal is set immediately and no listener is registered; otherwise
    ``add_load_listener`` receives the callback to invoke when loading
    completes. Extra invocations of that callback are harmless.
    """
    signal = ReadinessSignal(name)
    if already_loaded():
        signal.set()
    else:
        add_load_listener(signal.set)
    return signal
