"""Domain models and protocols for the plugin system.

Two plugin layers exist:

- *Media plugins* (``MediaPluginProtocol``) are what the search aggregator
  fans out to. ``RokuPlugin`` is one; it represents a device family whose
  content is organized around installed channels.
- *Channel plugins* (``ChannelPluginProtocol``) live inside a channel-based
  media plugin and know how a single Roku channel launches content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from rokucast.domain.entities.commands import PlaybackCommand
from rokucast.domain.entities.content import ChannelInfo, RokuContent


@dataclass(frozen=True)
class SearchResult:
    """Normalized search result.

    ``url`` is set only for externally sourced hits (web search); results
    produced natively by a channel leave it ``None``.
    """

    title: str
    content: Any
    url: str | None = None
    source: str | None = None
    description: str | None = None
    image_url: str | None = None
    dedup_key: str | None = None
    plugin: str | None = None

    @property
    def is_external(self) -> bool:
        return bool(self.url)

    def to_dict(self) -> dict[str, Any]:
        content = self.content
        payload: dict[str, Any] = {
            "source": self.source,
            "plugin": self.plugin,
            "title": self.title,
            "url": self.url,
            "description": self.description or "",
            "imageUrl": self.image_url or "",
        }
        if isinstance(content, RokuContent):
            payload.update(
                channelName=content.channel_name,
                channelId=content.channel_id,
                contentId=content.content_id,
                mediaType=content.media_type,
                content=content.to_dict(),
            )
        elif isinstance(content, ManualSearchInstructions):
            payload.update(
                channelName="Manual Search",
                channelId="MANUAL",
                contentId="MANUAL_SEARCH_TILE",
                mediaType="help",
                content=content.to_dict(),
            )
        elif hasattr(content, "to_dict"):
            payload["content"] = content.to_dict()
        else:
            payload["content"] = content
        return payload


@dataclass(frozen=True)
class ManualSearchInstructions:
    """Content of the synthetic "search manually" entry."""

    channels: tuple[ChannelInfo, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "manual_search_instructions",
            "channels": [
                {
                    "channelId": c.channel_id,
                    "channelName": c.channel_name,
                    "searchUrl": c.search_url,
                }
                for c in self.channels
            ],
        }


@runtime_checkable
class ChannelPluginProtocol(Protocol):
    """Protocol for Roku channel plugins.

    ``build_playback_command`` and ``extract_from_url`` are pure: no I/O,
    no randomness, no clock. ``extract_from_url`` never raises; a URL it
    does not recognize yields ``None``.
    """

    channel_id: str
    channel_name: str
    public_search_domain: str
    search_url: str

    def build_playback_command(self, content: RokuContent) -> PlaybackCommand: ...

    async def search(self, query: str) -> list[RokuContent]: ...

    def extract_from_url(
        self,
        url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> RokuContent | None: ...


@runtime_checkable
class MediaPluginProtocol(Protocol):
    """Protocol for media plugins queried by the search aggregator.

    ``channel_based`` marks plugins whose content model is organized
    around device channels; only those get the manual-search fallback.
    """

    name: str
    description: str
    channel_based: bool

    async def search(self, query: str, limit: int) -> list[SearchResult]: ...


@runtime_checkable
class ChannelInfoProvider(Protocol):
    """Implemented by plugins that can describe their channels."""

    def channel_info(self) -> list[ChannelInfo]: ...
