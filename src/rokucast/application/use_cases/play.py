"""Play use case: start resolved content on the device."""

from __future__ import annotations

from typing import Any, Mapping

import structlog

from rokucast.domain.entities.commands import PlaybackCommand
from rokucast.domain.entities.content import RokuContent
from rokucast.domain.plugins import PluginError
from rokucast.domain.ports import PluginRegistryPort

log = structlog.get_logger(__name__)


class PlayUseCase:
    """Hands content to the media plugin that owns its device.

    Content arrives fully resolved (from the library or a search result);
    this use case does not look anything up besides the plugin.
    """

    def __init__(self, plugins: PluginRegistryPort, plugin_name: str = "roku") -> None:
        self.plugins: PluginRegistryPort = plugins
        self._plugin_name = plugin_name

    def _plugin(self) -> Any:
        plugin = self.plugins.get(self._plugin_name)
        if not callable(getattr(plugin, "play", None)):
            raise PluginError(f"Plugin '{self._plugin_name}' does not support playback")
        return plugin

    async def execute(
        self,
        content: RokuContent | Mapping[str, Any],
        *,
        dry_run: bool = False,
    ) -> PlaybackCommand:
        """Play *content* and return the command that was sent.

        With ``dry_run`` the command is built but nothing is sent.

        Raises:
            PluginNotFoundError: the configured plugin is not registered.
            UnknownChannelError: no channel plugin for the content.
            PlaybackError: the device failed the command.
        """
        if not isinstance(content, RokuContent):
            content = RokuContent.from_dict(content)

        plugin = self._plugin()
        if dry_run:
            command = plugin.build_command(content)
            log.info(
                "play_dry_run",
                channel_id=content.channel_id,
                content_id=content.content_id,
            )
            return command
        return await plugin.play(content)
