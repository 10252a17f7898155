"""Roku media plugin: one device, many channels."""

from __future__ import annotations

import asyncio

import structlog

from rokucast.domain.entities.commands import PlaybackCommand
from rokucast.domain.entities.content import ChannelInfo, RokuContent
from rokucast.domain.plugins import (
    ChannelPluginProtocol,
    PluginConfigError,
    SearchResult,
)
from rokucast.domain.ports.ecp import EcpClientPort
from rokucast.domain.ports.web_search import StreamingSearchPort
from rokucast.infrastructure.channels.registry import ChannelRegistry
from rokucast.infrastructure.ecp.executor import CommandExecutor

log = structlog.get_logger(__name__)

UNKNOWN_TITLE = "Unknown"


def _native_result(channel: ChannelPluginProtocol, content: RokuContent) -> SearchResult:
    return SearchResult(
        title=content.title or UNKNOWN_TITLE,
        content=content,
        url=None,
        source=channel.channel_name,
        description=content.metadata.get("overview"),
        image_url=content.metadata.get("image_url"),
        dedup_key=content.dedup_key,
        plugin=RokuPlugin.name,
    )


def _web_result(source: str, content: RokuContent) -> SearchResult:
    return SearchResult(
        title=content.title or UNKNOWN_TITLE,
        content=content,
        url=content.metadata.get("original_url"),
        source=source,
        description=content.metadata.get("description"),
        image_url=content.metadata.get("image_url"),
        dedup_key=content.dedup_key,
        plugin=RokuPlugin.name,
    )


class RokuPlugin:
    """
    Media plugin for a Roku device.

    Playback resolves the content's channel in the registry, lets the
    channel build a command and hands it to the executor.  Search combines
    web search hits (when a provider is configured) with each channel's
    native search; every source runs concurrently with its own timeout and
    a failing source only drops its own results.
    """

    name = "roku"
    description = "Roku streaming player controlled over ECP"
    channel_based = True

    def __init__(
        self,
        *,
        device_ip: str | None,
        device_name: str,
        channels: ChannelRegistry,
        executor: CommandExecutor,
        ecp: EcpClientPort,
        web_search: StreamingSearchPort | None = None,
        web_max_results: int = 10,
        search_timeout: float = 10.0,
    ) -> None:
        self._device_ip = device_ip
        self._device_name = device_name
        self._channels = channels
        self._executor = executor
        self._ecp = ecp
        self._web_search = web_search
        self._web_max_results = web_max_results
        self._search_timeout = search_timeout

    @property
    def device_name(self) -> str:
        return self._device_name

    @property
    def channels(self) -> ChannelRegistry:
        return self._channels

    def _device(self) -> str:
        if not self._device_ip:
            raise PluginConfigError(
                "Roku plugin requires 'roku.device_ip' configuration"
            )
        return self._device_ip

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------

    def build_command(self, content: RokuContent) -> PlaybackCommand:
        """Resolve the channel and build its command without sending it."""
        return self._channels.resolve(content.channel_id).build_playback_command(content)

    async def play(self, content: RokuContent) -> PlaybackCommand:
        """Build and execute the playback command for *content*.

        Raises:
            UnknownChannelError: no plugin for ``content.channel_id``.
            PluginConfigError: no device configured.
            PlaybackError: the device was unreachable or rejected a step.
        """
        device = self._device()
        command = self.build_command(content)
        log.info(
            "roku_play",
            device=device,
            channel_id=content.channel_id,
            content_id=content.content_id,
            title=content.title,
        )
        await self._executor.execute(device, command)
        return command

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search(self, query: str, limit: int) -> list[SearchResult]:
        tasks = [self._search_web(query, limit)]
        tasks.extend(self._search_channel(ch, query) for ch in self._channels.values())
        results_per_source = await asyncio.gather(*tasks)

        all_results: list[SearchResult] = []
        for results in results_per_source:
            all_results.extend(results)
        log.info(
            "roku_search_completed",
            query=query,
            channels=len(self._channels),
            result_count=len(all_results),
        )
        return all_results

    async def _search_web(self, query: str, limit: int) -> list[SearchResult]:
        if self._web_search is None:
            return []
        provider = self._web_search
        try:
            found = await asyncio.wait_for(
                provider.search_streaming(query, min(limit, self._web_max_results)),
                timeout=self._search_timeout,
            )
        except TimeoutError:
            log.warning(
                "web_search_timeout",
                provider=provider.name,
                timeout=self._search_timeout,
            )
            return []
        except Exception:
            log.warning("web_search_failed", provider=provider.name, exc_info=True)
            return []
        return [_web_result(provider.name, content) for content in found]

    async def _search_channel(
        self, channel: ChannelPluginProtocol, query: str
    ) -> list[SearchResult]:
        try:
            found = await asyncio.wait_for(
                channel.search(query),
                timeout=self._search_timeout,
            )
        except TimeoutError:
            log.warning(
                "channel_search_timeout",
                channel=channel.channel_name,
                timeout=self._search_timeout,
            )
            return []
        except Exception:
            log.warning(
                "channel_search_failed", channel=channel.channel_name, exc_info=True
            )
            return []
        log.debug(
            "channel_search_completed",
            channel=channel.channel_name,
            result_count=len(found),
        )
        return [_native_result(channel, content) for content in found]

    # ------------------------------------------------------------------
    # Channel and device information
    # ------------------------------------------------------------------

    def channel_info(self) -> list[ChannelInfo]:
        return self._channels.channel_info()

    def extract_from_url(
        self,
        url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> RokuContent | None:
        return self._channels.extract_from_url(url, title, description)

    async def device_info(self) -> dict[str, str]:
        return await self._ecp.query_device_info(self._device())

    async def apps(self) -> list[dict[str, str]]:
        return await self._ecp.query_apps(self._device())

    def __repr__(self) -> str:
        return (
            f"RokuPlugin(device={self._device_ip!r}, "
            f"channels={len(self._channels)})"
        )
