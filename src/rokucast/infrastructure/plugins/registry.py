"""Immutable media plugin registry."""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

import structlog

from rokucast.domain.plugins import (
    DuplicatePluginError,
    MediaPluginProtocol,
    PluginNotFoundError,
)

log = structlog.get_logger(__name__)


class PluginRegistry:
    """
    Media plugins by name.

    The plugin set is fixed at construction; lookups never load or
    mutate anything, so the registry is safe to share across requests.
    """

    def __init__(self, plugins: Iterable[MediaPluginProtocol] = ()) -> None:
        by_name: dict[str, MediaPluginProtocol] = {}
        for plugin in plugins:
            if plugin.name in by_name:
                raise DuplicatePluginError(
                    f"Plugin name '{plugin.name}' already exists"
                )
            by_name[plugin.name] = plugin
        self._plugins = MappingProxyType(by_name)
        log.info("plugins_registered", count=len(by_name), plugins=list(by_name))

    def list_names(self) -> list[str]:
        return sorted(self._plugins)

    def get(self, name: str) -> MediaPluginProtocol:
        plugin = self._plugins.get(name)
        if plugin is None:
            raise PluginNotFoundError(f"Plugin '{name}' not found")
        return plugin

    def all(self) -> list[MediaPluginProtocol]:
        return [self._plugins[name] for name in self.list_names()]

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)
