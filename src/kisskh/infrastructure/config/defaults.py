"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "kisskh",
    "environment": "dev",
    "http": {
        "timeout_seconds": 10.0,
        "follow_redirects": True,
        "user_agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
        ),
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "kisskh": {
        "base_url": "https://kisskh.club",
        "server": "02",
        "feed_timeout_seconds": 5.0,
        "subtitle_timeout_seconds": 10.0,
    },
}
