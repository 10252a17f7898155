"""Roku content records and channel descriptors."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

# Stored library entries use camelCase keys; the domain uses snake_case.
_METADATA_ALIASES: dict[str, str] = {
    "resumePositionTicks": "resume_position_ticks",
    "runtimeTicks": "runtime_ticks",
    "serverId": "server_id",
    "itemType": "item_type",
    "seriesName": "series_name",
    "seasonNumber": "season_number",
    "episodeNumber": "episode_number",
    "imageUrl": "image_url",
    "originalUrl": "original_url",
    "searchUrl": "search_url",
    "playedPercentage": "played_percentage",
    "isFavorite": "is_favorite",
    "communityRating": "community_rating",
    "officialRating": "official_rating",
}
_METADATA_CAMEL: dict[str, str] = {v: k for k, v in _METADATA_ALIASES.items()}


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


@dataclass(frozen=True)
class RokuContent:
    """Content playable on a Roku channel.

    ``channel_id`` selects the channel plugin; ``content_id`` is the
    channel-specific identifier (numeric ID, UUID, ASIN, ...).
    ``metadata`` holds channel-specific fields; channels ignore keys
    they do not define.
    """

    channel_id: str
    content_id: str
    media_type: str | None = None
    title: str | None = None
    channel_name: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.channel_id or not self.channel_id.strip():
            raise ValueError("channel_id must not be blank")
        if not self.content_id or not self.content_id.strip():
            raise ValueError("content_id must not be blank")

    @property
    def dedup_key(self) -> str:
        return f"{self.channel_id}-{self.content_id}"

    @property
    def resume_position_ticks(self) -> int | None:
        value = self.metadata.get("resume_position_ticks")
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RokuContent:
        """Build content from a snake_case or camelCase mapping."""
        raw_meta = data.get("metadata") or {}
        metadata = {
            _METADATA_ALIASES.get(key, key): value
            for key, value in raw_meta.items()
            if value is not None
        }
        return cls(
            channel_id=str(_pick(data, "channel_id", "channelId") or ""),
            content_id=str(_pick(data, "content_id", "contentId") or ""),
            media_type=_pick(data, "media_type", "mediaType"),
            title=_pick(data, "title"),
            channel_name=_pick(data, "channel_name", "channelName"),
            metadata=metadata,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used by library entries."""
        return {
            "channelId": self.channel_id,
            "contentId": self.content_id,
            "mediaType": self.media_type,
            "title": self.title,
            "channelName": self.channel_name,
            "metadata": {
                _METADATA_CAMEL.get(key, key): value
                for key, value in self.metadata.items()
            },
        }


@dataclass(frozen=True)
class ChannelInfo:
    """Channel descriptor for manual search instructions."""

    channel_id: str
    channel_name: str
    search_url: str
