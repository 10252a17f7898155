from .base import (
    ChannelInfoProvider,
    ChannelPluginProtocol,
    ManualSearchInstructions,
    MediaPluginProtocol,
    SearchResult,
)
from .exceptions import (
    DuplicatePluginError,
    PluginConfigError,
    PluginError,
    PluginNotFoundError,
    SearchProviderError,
    UnknownChannelError,
)

__all__ = [
    "ChannelInfoProvider",
    "ChannelPluginProtocol",
    "DuplicatePluginError",
    "ManualSearchInstructions",
    "MediaPluginProtocol",
    "PluginConfigError",
    "PluginError",
    "PluginNotFoundError",
    "SearchProviderError",
    "SearchResult",
    "UnknownChannelError",
]
