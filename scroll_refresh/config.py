"""
Application Configuration

This file contains the default configuration settings for the scroll refresh
coordinator. It follows a modular approach to keep settings organized and easy
to manage. Values can be overridden through environment variables or a .env file.
"""

import os

from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

# --- Application Metadata ---
# Used as the QSettings organization/application pair.
APP_NAME = "Scroll Refresh"
APP_VERSION = "0.1.0"

# --- Refresh Coordination ---
# Timing for the debounced layout recompute.
REFRESH_SETTINGS = {
    # Quiet period (milliseconds) before a requested recompute executes.
    # Each new request within the window restarts the delay. Kept as given;
    # ConfigManager.validate_config() coerces and checks it.
    "debounce_ms": os.getenv("SCROLL_REFRESH_DEBOUNCE_MS", "100"),
    # Upper bound accepted for the debounce delay.
    "max_debounce_ms": 5000,
}

# --- Readiness Signals ---
# Names used in logs and error context for the two readiness conditions.
READINESS_SIGNALS = {
    "fonts": "fonts",
    "resources": "resources",
}

# --- Logging ---
LOGGING = {
    "level": os.getenv("SCROLL_REFRESH_LOG_LEVEL", "INFO"),
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    # Optional log file; None keeps logging on the console only.
    "file": os.getenv("SCROLL_REFRESH_LOG_FILE") or None,
}
