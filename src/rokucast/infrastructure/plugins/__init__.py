from __future__ import annotations

from .registry import PluginRegistry
from .roku import RokuPlugin

__all__ = ["PluginRegistry", "RokuPlugin"]
