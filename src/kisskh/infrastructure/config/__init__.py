from __future__ import annotations

from .load import load_config
from .schema import AppConfig, EnvOverrides, KissKHConfig

__all__ = ["AppConfig", "EnvOverrides", "KissKHConfig", "load_config"]
