"""
Application Composition Root

Owns the single RefreshCoordinator of an application lifetime. Hosts build one
RefreshContext at startup and pass it (or its coordinator) to the components
that need to wait for readiness or request a recompute.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from scroll_refresh.core.config_manager import ConfigManager
from scroll_refresh.core.coordinator import RefreshCoordinator, SignalFactory
from scroll_refresh.core.scheduling import Scheduler

logger = logging.getLogger(__name__)


@dataclass
class RefreshContext:
    """Application-scoped handles for layout refresh coordination."""

    config_manager: ConfigManager
    coordinator: RefreshCoordinator

    def on_ready(self, callback: Callable[[], None]) -> None:
        self.coordinator.on_ready(callback)

    def request_recompute(self) -> None:
        self.coordinator.request_recompute()


def create_refresh_context(
    recompute: Callable[[], None],
    wait_for_fonts: SignalFactory,
    wait_for_resources: SignalFactory,
    scheduler: Scheduler,
    config_manager: Optional[ConfigManager] = None,
) -> RefreshContext:
    """
    Build the coordinator from configuration.

    The debounce delay comes from ``refresh.debounce_ms`` (runtime override,
    persisted user setting or default, in that order) and is validated before
    anything starts waiting.

    Raises:
        ConfigurationError: If the configured debounce delay is invalid
    """
    if config_manager is None:
        config_manager = ConfigManager()

    settings = config_manager.validate_config()
    coordinator = RefreshCoordinator(
        recompute=recompute,
        wait_for_fonts=wait_for_fonts,
        wait_for_resources=wait_for_resources,
        scheduler=scheduler,
        debounce_ms=settings.debounce_ms,
        config_manager=config_manager,
    )
    logger.info(f"Refresh context created (debounce {settings.debounce_ms}ms, ready={coordinator.is_ready})")
    return RefreshContext(config_manager=config_manager, coordinator=coordinator)
