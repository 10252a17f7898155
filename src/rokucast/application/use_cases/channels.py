"""Channel listing for manual search instructions."""

from __future__ import annotations

from rokucast.domain.entities.content import ChannelInfo
from rokucast.domain.plugins import ChannelInfoProvider
from rokucast.domain.ports import PluginRegistryPort


class ChannelInfoUseCase:
    """Lists the channels of every channel-based plugin."""

    def __init__(self, plugins: PluginRegistryPort) -> None:
        self.plugins = plugins

    def execute(self) -> list[ChannelInfo]:
        channels: list[ChannelInfo] = []
        for plugin in self.plugins.all():
            if getattr(plugin, "channel_based", False) and isinstance(
                plugin, ChannelInfoProvider
            ):
                channels.extend(plugin.channel_info())
        return channels
