from __future__ import annotations

from .emby import EmbyChannelPlugin
from .factory import build_channel_registry, create_channel_plugin
from .registry import ChannelRegistry
from .streaming import (
    STREAMING_CHANNELS,
    StreamingChannel,
    StreamingChannelPlugin,
    find_streaming_channel,
)

__all__ = [
    "STREAMING_CHANNELS",
    "ChannelRegistry",
    "EmbyChannelPlugin",
    "StreamingChannel",
    "StreamingChannelPlugin",
    "build_channel_registry",
    "create_channel_plugin",
    "find_streaming_channel",
]
