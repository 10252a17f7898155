"""Plugin system exceptions."""

from __future__ import annotations


class PluginError(Exception):
    """Base class for all plugin-related errors."""


class PluginConfigError(PluginError):
    """Raised when a plugin or channel definition is invalid."""


class PluginNotFoundError(PluginError):
    """Raised when a plugin name is not known to the registry."""


class DuplicatePluginError(PluginError):
    """Raised when two plugins resolve to the same name or channel id."""


class UnknownChannelError(PluginError):
    """Raised when no channel plugin is registered for a channel id."""

    def __init__(self, channel_id: str) -> None:
        self.channel_id = channel_id
        super().__init__(f"No channel plugin registered for channel ID: {channel_id}")


class SearchProviderError(PluginError):
    """Raised when a single search provider call fails."""

    def __init__(
        self,
        provider: str,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")
