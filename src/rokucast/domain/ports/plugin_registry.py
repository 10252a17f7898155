"""Port for media plugin lookup."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from rokucast.domain.plugins.base import MediaPluginProtocol


@runtime_checkable
class PluginRegistryPort(Protocol):
    """Read-only access to media plugins by name."""

    def list_names(self) -> list[str]: ...
    def get(self, name: str) -> MediaPluginProtocol: ...
    def all(self) -> list[MediaPluginProtocol]: ...
