from __future__ import annotations

from .load import load_config
from .schema import AppConfig, ChannelDefinition, EnvOverrides, RokuConfig, SearchConfig

__all__ = [
    "AppConfig",
    "ChannelDefinition",
    "EnvOverrides",
    "RokuConfig",
    "SearchConfig",
    "load_config",
]
