"""
Tests for the composition root and logging setup.
"""

import logging

import pytest

from scroll_refresh import create_refresh_context
from scroll_refresh.core.signals import ReadinessSignal
from scroll_refresh.exceptions import ConfigurationError
from scroll_refresh.logging_setup import configure_logging


def test_context_uses_configured_delay(config_manager, scheduler, recompute):
    config_manager.set("refresh.debounce_ms", 50)
    fonts, resources = ReadinessSignal("fonts"), ReadinessSignal("resources")

    context = create_refresh_context(
        recompute, lambda: fonts, lambda: resources, scheduler, config_manager=config_manager
    )
    fired = []
    context.on_ready(lambda: fired.append(True))
    fonts.set()
    resources.set()
    context.request_recompute()
    scheduler.advance(50)

    assert context.coordinator.debounce_ms == 50
    assert fired == [True]
    assert context.coordinator.get_refresh_count() == 2


def test_isolated_contexts(config_manager, scheduler, recompute):
    first = create_refresh_context(
        recompute, lambda: ReadinessSignal("f"), lambda: ReadinessSignal("r"), scheduler, config_manager
    )
    second = create_refresh_context(
        recompute, lambda: ReadinessSignal("f"), lambda: ReadinessSignal("r"), scheduler, config_manager
    )

    first.coordinator.force_recompute()

    assert first.coordinator is not second.coordinator
    assert second.coordinator.get_refresh_count() == 0


def test_invalid_configuration_fails_fast(config_manager, scheduler, recompute):
    config_manager.set("refresh.debounce_ms", -1)

    with pytest.raises(ConfigurationError):
        create_refresh_context(
            recompute, lambda: ReadinessSignal("f"), lambda: ReadinessSignal("r"), scheduler, config_manager
        )


def test_configure_logging_with_file(tmp_path):
    log_file = tmp_path / "refresh.log"
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level

    try:
        configure_logging(level="debug", log_file=str(log_file))
        logging.getLogger("scroll_refresh.test").debug("hello refresh")
        for handler in root.handlers:
            handler.flush()

        assert root.level == logging.DEBUG
        assert "hello refresh" in log_file.read_text()
    finally:
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()
        for handler in saved_handlers:
            root.addHandler(handler)
        root.setLevel(saved_level)
