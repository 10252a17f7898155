"""Streaming channels without a public search API.

Netflix, Disney+, HBO Max and Prime Video share one playback pattern:

    Launch(channel, "contentId=<id>&mediaType=<type>") -> Wait(2000) -> Press(key)

The launch opens the content page; the trailing key press either picks the
default profile (SELECT) or starts playback (PLAY).  Everything that
differs per channel lives in the ``STREAMING_CHANNELS`` table below, so
adding a channel is a one-entry change.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

import structlog

from rokucast.domain.entities.commands import (
    ActionSequence,
    Launch,
    Press,
    RokuKey,
    Wait,
)
from rokucast.domain.entities.content import RokuContent

log = structlog.get_logger(__name__)

LAUNCH_WAIT_MS = 2000
DEFAULT_MEDIA_TYPE = "movie"


def _always_movie(_url: str) -> str:
    return DEFAULT_MEDIA_TYPE


def _netflix_media_type(url: str) -> str:
    # /watch/<id> plays a title directly; /title/<id> is a show page.
    return "movie" if "/watch/" in url else "series"


@dataclass(frozen=True)
class TitleMarker:
    """Title substring required for URLs on a shared retail domain."""

    domain: str
    marker: str


@dataclass(frozen=True)
class StreamingChannel:
    """Static description of one URL-pattern channel."""

    key: str
    channel_id: str
    channel_name: str
    public_search_domain: str
    search_url: str
    url_pattern: re.Pattern[str]
    default_title: str
    post_launch_key: RokuKey
    media_type_for: Callable[[str], str] = _always_movie
    title_marker: TitleMarker | None = None
    aliases: tuple[str, ...] = ()


NETFLIX = StreamingChannel(
    key="netflix",
    channel_id="12",
    channel_name="Netflix",
    public_search_domain="netflix.com",
    search_url="https://www.netflix.com/search",
    url_pattern=re.compile(r"netflix\.com/(?:watch|title)/(\d+)"),
    default_title="Netflix Content",
    post_launch_key=RokuKey.PLAY,
    media_type_for=_netflix_media_type,
)

DISNEY_PLUS = StreamingChannel(
    key="disneyplus",
    channel_id="291097",
    channel_name="Disney+",
    public_search_domain="disneyplus.com",
    search_url="https://www.disneyplus.com/search",
    url_pattern=re.compile(r"disneyplus\.com/(?:play|video)/([a-f0-9-]+)"),
    default_title="Disney+ Content",
    post_launch_key=RokuKey.SELECT,
    aliases=("disney+", "disney"),
)

HBO_MAX = StreamingChannel(
    key="hbomax",
    channel_id="61322",
    channel_name="HBO Max",
    public_search_domain="hbomax.com",
    search_url="https://play.max.com/search",
    url_pattern=re.compile(
        r"(?:max\.com|hbomax\.com)/"
        r"(?:(?:movies|series)/[^/]+/|(?:video/watch|play)/)([^/?]+)"
    ),
    default_title="HBO Max Content",
    post_launch_key=RokuKey.SELECT,
    aliases=("hbo max", "hbo", "max"),
)

PRIME_VIDEO = StreamingChannel(
    key="primevideo",
    channel_id="13",
    channel_name="Prime Video",
    public_search_domain="amazon.com",
    search_url="https://www.primevideo.com/search?phrase=",
    url_pattern=re.compile(r"(?:amazon\.com|primevideo\.com)/.*?/(B[A-Z0-9]{9})"),
    default_title="Prime Video Content",
    post_launch_key=RokuKey.SELECT,
    # amazon.com also sells physical goods; web hits must be video pages.
    title_marker=TitleMarker(domain="amazon.com", marker="| Prime Video"),
    aliases=("prime video", "prime", "amazon"),
)

STREAMING_CHANNELS: tuple[StreamingChannel, ...] = (
    NETFLIX,
    DISNEY_PLUS,
    HBO_MAX,
    PRIME_VIDEO,
)


def find_streaming_channel(type_name: str) -> StreamingChannel | None:
    """Look up a table entry by config type name or alias."""
    wanted = type_name.strip().lower()
    for channel in STREAMING_CHANNELS:
        if wanted == channel.key or wanted in channel.aliases:
            return channel
    return None


class StreamingChannelPlugin:
    """Channel plugin driven by a ``StreamingChannel`` table entry."""

    def __init__(self, channel: StreamingChannel) -> None:
        self._channel = channel

    @property
    def channel_id(self) -> str:
        return self._channel.channel_id

    @property
    def channel_name(self) -> str:
        return self._channel.channel_name

    @property
    def public_search_domain(self) -> str:
        return self._channel.public_search_domain

    @property
    def search_url(self) -> str:
        return self._channel.search_url

    @property
    def post_launch_key(self) -> RokuKey:
        return self._channel.post_launch_key

    def build_playback_command(self, content: RokuContent) -> ActionSequence:
        media_type = (content.media_type or DEFAULT_MEDIA_TYPE).lower()
        return ActionSequence(
            actions=(
                Launch(
                    channel_id=self.channel_id,
                    params=f"contentId={content.content_id}&mediaType={media_type}",
                ),
                Wait(LAUNCH_WAIT_MS),
                Press(self._channel.post_launch_key, 1),
            )
        )

    async def search(self, query: str) -> list[RokuContent]:
        # No public search API; users paste URLs or rely on web search.
        return []

    def extract_from_url(
        self,
        url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> RokuContent | None:
        if not url:
            return None
        match = self._channel.url_pattern.search(url)
        if match is None:
            return None

        marker = self._channel.title_marker
        if marker is not None and title is not None and marker.domain in url:
            if marker.marker not in title:
                log.debug(
                    "url_title_marker_missing",
                    channel=self.channel_name,
                    url=url,
                    marker=marker.marker,
                )
                return None

        return RokuContent(
            channel_id=self.channel_id,
            content_id=match.group(1),
            media_type=self._channel.media_type_for(url),
            title=self._channel.default_title,
            channel_name=self.channel_name,
        )

    def __repr__(self) -> str:
        return f"StreamingChannelPlugin({self.channel_name!r}, id={self.channel_id!r})"
