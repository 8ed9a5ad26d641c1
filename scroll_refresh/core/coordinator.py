"""
Refresh Coordinator

Gates layout-dependent work until the page is measurable and batches the
expensive "recompute all scroll measurements" call that many independent
components would otherwise issue on their own.

Key Features:
- Waits on two one-shot readiness signals (fonts, resources)
- Runs queued ready-callbacks exactly once, in registration order
- One unconditional recompute at the moment both signals are in
- Debounced recompute requests (last request in a burst wins)
- Forced recompute that preempts a pending debounced one
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from scroll_refresh import config
from scroll_refresh.exceptions import SignalError, ValidationError

from .config_manager import ConfigManager, validate_refresh_settings
from .scheduling import Debouncer, Scheduler
from .signals import ReadinessSignal

logger = logging.getLogger(__name__)

SignalFactory = Callable[[], ReadinessSignal]


class CoordinatorPhase(Enum):
    """Lifecycle phases of the coordinator."""

    CONSTRUCTED = "constructed"
    WAITING = "waiting"
    INITIALIZED = "initialized"


@dataclass(frozen=True)
class CoordinatorState:
    """Point-in-time snapshot of coordinator state."""

    phase: CoordinatorPhase
    fonts_ready: bool
    resources_ready: bool
    initialized: bool
    pending_callbacks: int
    refresh_count: int
    refresh_pending: bool


class RefreshCoordinator:
    """
    {
        "name": "RefreshCoordinator",
        "version": "1.0.0",
        "description": "Deferred-readiness gate with debounced layout recompute.",
        "dependencies": ["Scheduler", "ReadinessSignal", "ConfigManager"],
        "interface": {
            "inputs": ["callback: Callable[[], None]"],
            "outputs": "Ready-callbacks run once; recompute calls coalesced"
        }
    }
    Construct one instance per application lifetime (see
    ``scroll_refresh.application.RefreshContext``) and pass it to consumers.
    Initialization starts in the constructor; if both signals are already
    set, the coordinator is ready when the constructor returns.
    """

    def __init__(
        self,
        recompute: Callable[[], None],
        wait_for_fonts: SignalFactory,
        wait_for_resources: SignalFactory,
        scheduler: Scheduler,
        debounce_ms: Optional[int] = None,
        config_manager: Optional[ConfigManager] = None,
    ):
        """
        Initialize the coordinator and start waiting on readiness signals.

        Args:
            recompute: Layout-engine refresh entry point (idempotent, synchronous)
            wait_for_fonts: Returns the one-shot fonts-ready signal
            wait_for_resources: Returns the one-shot resources-ready signal
            scheduler: Timer facility of the host event loop
            debounce_ms: Delay before a requested recompute runs; read from
                configuration when omitted
            config_manager: Optional configuration source; the debounce delay
                follows later changes to ``refresh.debounce_ms``
        """
        if not callable(recompute):
            raise ValidationError("recompute must be callable", field="recompute", value=recompute)

        self._recompute = recompute
        self._config_manager = config_manager

        if config_manager is not None:
            settings = config_manager.get_refresh_settings()
        else:
            settings = validate_refresh_settings(config.REFRESH_SETTINGS)
        if debounce_ms is None:
            debounce_ms = settings.debounce_ms
        self._debouncer = Debouncer(
            scheduler, debounce_ms, self._run_recompute, max_delay_ms=settings.max_debounce_ms
        )

        self._phase = CoordinatorPhase.CONSTRUCTED
        self._fonts_ready = False
        self._resources_ready = False
        self._initialized = False
        self._pending_callbacks: list[Callable[[], None]] = []
        self._refresh_count = 0
        self.last_error: Optional[SignalError] = None

        if config_manager is not None:
            config_manager.subscribe(self._on_config_changed)

        self._start(wait_for_fonts, wait_for_resources)

    # Initialization protocol -------------------------------------------

    def _start(self, wait_for_fonts: SignalFactory, wait_for_resources: SignalFactory) -> None:
        self._phase = CoordinatorPhase.WAITING
        logger.debug(f"RefreshCoordinator waiting on fonts and resources (debounce {self.debounce_ms}ms)")

        fonts = wait_for_fonts()
        fonts.subscribe(self._on_fonts_ready, self._signal_failed_handler(fonts.name))
        resources = wait_for_resources()
        resources.subscribe(self._on_resources_ready, self._signal_failed_handler(resources.name))

    def _on_fonts_ready(self) -> None:
        self._fonts_ready = True
        self._check_ready()

    def _on_resources_ready(self) -> None:
        self._resources_ready = True
        self._check_ready()

    def _signal_failed_handler(self, name: str) -> Callable[[BaseException], None]:
        def _on_failed(error: BaseException) -> None:
            # No retry: the coordinator keeps waiting on this signal.
            self.last_error = SignalError(
                f"Readiness signal '{name}' failed: {error!r}",
                signal_name=name,
            )
            self.last_error.__cause__ = error

        return _on_failed

    def _check_ready(self) -> None:
        if not (self._fonts_ready and self._resources_ready) or self._initialized:
            return

        self._initialized = True
        self._phase = CoordinatorPhase.INITIALIZED
        logger.info(f"RefreshCoordinator ready; running {len(self._pending_callbacks)} queued callbacks")
        try:
            self._run_recompute()
        except Exception:
            # Queued callbacks run even if the first recompute raised; the
            # recompute error is the one that propagates.
            try:
                self._drain_callbacks()
            except Exception as e:
                logger.error(f"Ready callback failed after initial recompute error: {e}")
            raise
        self._drain_callbacks()

    def _drain_callbacks(self) -> None:
        callbacks, self._pending_callbacks = self._pending_callbacks, []
        first_error: Optional[BaseException] = None
        for callback in callbacks:
            try:
                callback()
            except Exception as e:
                if first_error is None:
                    first_error = e
                else:
                    logger.error(f"Ready callback {getattr(callback, '__name__', callback)} failed: {e}")
        if first_error is not None:
            raise first_error

    # Public API -----------------------------------------------------------

    def on_ready(self, callback: Callable[[], None]) -> None:
        """
        Run ``callback`` once the coordinator is ready.

        Runs it synchronously, before returning, when already ready;
        otherwise queues it behind earlier registrations.
        """
        if not callable(callback):
            raise ValidationError("on_ready callback must be callable", field="callback", value=callback)

        if self._initialized:
            callback()
        else:
            self._pending_callbacks.append(callback)

    def request_recompute(self) -> None:
        """Schedule a recompute after the debounce delay, replacing any pending one."""
        self._debouncer.trigger()

    def force_recompute(self) -> None:
        """Cancel any pending recompute and recompute now. Use sparingly."""
        self._debouncer.flush()

    @property
    def is_ready(self) -> bool:
        return self._initialized

    @property
    def debounce_ms(self) -> int:
        return self._debouncer.delay_ms

    @debounce_ms.setter
    def debounce_ms(self, value: int) -> None:
        self._debouncer.delay_ms = value

    def get_refresh_count(self) -> int:
        """Number of recomputes actually executed."""
        return self._refresh_count

    def reset_refresh_count(self) -> None:
        self._refresh_count = 0

    def get_state(self) -> CoordinatorState:
        return CoordinatorState(
            phase=self._phase,
            fonts_ready=self._fonts_ready,
            resources_ready=self._resources_ready,
            initialized=self._initialized,
            pending_callbacks=len(self._pending_callbacks),
            refresh_count=self._refresh_count,
            refresh_pending=self._debouncer.pending,
        )

    def get_state_summary(self) -> dict[str, Any]:
        """Get summary of current state for debugging."""
        state = self.get_state()
        return {
            "phase": state.phase.value,
            "fonts_ready": state.fonts_ready,
            "resources_ready": state.resources_ready,
            "pending_callbacks": state.pending_callbacks,
            "refresh_count": state.refresh_count,
            "refresh_pending": state.refresh_pending,
            "debounce_ms": self.debounce_ms,
            "last_error": self.last_error.to_dict() if self.last_error else None,
        }

    # Internal ------------------------------------------------------------

    def _run_recompute(self) -> None:
        self._refresh_count += 1
        logger.debug(f"[RefreshCoordinator] Refresh #{self._refresh_count}")
        self._recompute()

    def _on_config_changed(self, key: str, value: Any) -> None:
        if key not in ("refresh.debounce_ms", "refresh.max_debounce_ms", "__reset__"):
            return
        settings = self._config_manager.get_refresh_settings()
        self._debouncer.max_delay_ms = settings.max_debounce_ms
        if settings.debounce_ms != self.debounce_ms:
            logger.info(f"Debounce delay changed: {self.debounce_ms}ms -> {settings.debounce_ms}ms")
            self.debounce_ms = settings.debounce_ms
