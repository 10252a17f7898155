"""Build the channel registry from configuration."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import httpx
import structlog

from rokucast.domain.plugins import ChannelPluginProtocol, PluginConfigError
from rokucast.infrastructure.config.schema import ChannelDefinition

from .emby import EmbyChannelPlugin
from .registry import ChannelRegistry
from .streaming import StreamingChannelPlugin, find_streaming_channel

log = structlog.get_logger(__name__)

_EMBY_REQUIRED = ("serverUrl", "apiKey", "userId")


def _require(config: Mapping[str, Any], key: str, channel_type: str) -> str:
    value = config.get(key)
    if not isinstance(value, str) or not value.strip():
        raise PluginConfigError(
            f"{channel_type} channel plugin requires '{key}' configuration"
        )
    return value.strip()


def create_channel_plugin(
    definition: ChannelDefinition,
    http_client: httpx.AsyncClient,
) -> ChannelPluginProtocol:
    """Instantiate one channel plugin.

    Raises:
        PluginConfigError: unknown type or missing required settings.
    """
    channel_type = definition.type.strip().lower()
    if channel_type == "emby":
        server_url, api_key, user_id = (
            _require(definition.config, key, "Emby") for key in _EMBY_REQUIRED
        )
        return EmbyChannelPlugin(
            server_url=server_url,
            api_key=api_key,
            user_id=user_id,
            http_client=http_client,
        )

    channel = find_streaming_channel(channel_type)
    if channel is None:
        raise PluginConfigError(f"Unknown Roku channel type: {definition.type!r}")
    return StreamingChannelPlugin(channel)


def build_channel_registry(
    definitions: Iterable[ChannelDefinition],
    http_client: httpx.AsyncClient,
) -> ChannelRegistry:
    """
    Create every enabled channel and freeze them into a registry.

    A bad definition never prevents startup: unknown types, missing
    settings and repeated channel ids are logged and skipped.
    """
    plugins: dict[str, ChannelPluginProtocol] = {}
    for definition in definitions:
        if not definition.enabled:
            log.debug("channel_disabled", channel_type=definition.type)
            continue
        try:
            plugin = create_channel_plugin(definition, http_client)
        except PluginConfigError as exc:
            log.warning(
                "channel_plugin_skipped",
                channel_type=definition.type,
                error=str(exc),
            )
            continue

        if plugin.channel_id in plugins:
            log.warning(
                "channel_plugin_duplicate",
                channel_type=definition.type,
                channel_id=plugin.channel_id,
            )
            continue
        plugins[plugin.channel_id] = plugin
        log.info(
            "channel_plugin_registered",
            channel_name=plugin.channel_name,
            channel_id=plugin.channel_id,
        )

    return ChannelRegistry(plugins.values())
