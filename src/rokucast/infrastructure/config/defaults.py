"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "rokucast",
    "environment": "dev",
    "roku": {
        "device_ip": None,
        "device_name": "Roku Device",
        "port": 8060,
        "keypress_delay_ms": 100,
        "char_delay_ms": 50,
    },
    # Streaming channels need no credentials; Emby is added via config/env.
    "channels": [
        {"type": "netflix", "enabled": True},
        {"type": "disneyplus", "enabled": True},
        {"type": "hbomax", "enabled": True},
        {"type": "primevideo", "enabled": True},
    ],
    "search": {
        "default_limit": 20,
        "plugin_timeout_seconds": 10.0,
        "source_timeout_seconds": None,  # Derived from plugin_timeout_seconds
        "brave_api_key": None,
        "brave_max_results": 10,
    },
    "http": {
        "timeout_seconds": 10.0,
        "user_agent": "rokucast/0.1.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
}
