"""
Logging configuration for hosts embedding the refresh coordinator.
"""

import logging
from typing import Optional

from scroll_refresh import config


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure root logging the same way for every host.

    Args:
        level: Level name; defaults to the configured ``LOGGING['level']``
        log_file: Optional file to log to in addition to the console
    """
    settings = config.LOGGING
    level_name = (level or settings["level"]).upper()
    log_file = log_file or settings.get("file")

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=settings["format"],
        handlers=handlers,
        force=True,
    )
    logging.getLogger(__name__).debug(f"Logging configured at {level_name}")
