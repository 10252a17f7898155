"""Emby channel plugin: native search API + deep link with resume position."""

from __future__ import annotations

from typing import Any

import httpx
import structlog

from rokucast.domain.entities.commands import DeepLink
from rokucast.domain.entities.content import RokuContent
from rokucast.domain.plugins.exceptions import SearchProviderError

log = structlog.get_logger(__name__)

EMBY_CHANNEL_ID = "44191"
SEARCH_LIMIT = 50
_SEARCH_FIELDS = (
    "Overview,Path,ImageTags,Genres,CommunityRating,OfficialRating,UserData"
)
_ITEM_TYPES = "Movie,Episode"


class EmbyChannelPlugin:
    """Roku channel plugin for an Emby media server.

    Playback uses the Emby for Roku deep link
    ``Command=PlayNow&ItemIds=<id>[&StartPositionTicks=<ticks>]``, which
    starts in a couple of seconds instead of navigating the UI.  Search
    queries the server's ``/Users/{user}/Items`` endpoint.

    The server is private, so ``public_search_domain`` is empty and the
    channel never appears in web-search site filters.
    """

    channel_id = EMBY_CHANNEL_ID
    channel_name = "Emby"
    public_search_domain = ""

    def __init__(
        self,
        *,
        server_url: str,
        api_key: str,
        user_id: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._server_url = server_url.rstrip("/")
        self._api_key = api_key
        self._user_id = user_id
        self._http = http_client

    @property
    def search_url(self) -> str:
        return f"{self._server_url}/web/index.html#!/search"

    def build_playback_command(self, content: RokuContent) -> DeepLink:
        params = [
            "Command=PlayNow",
            f"ItemIds={content.content_id}",
        ]
        resume = content.resume_position_ticks
        if resume is not None and resume > 0:
            params.append(f"StartPositionTicks={resume}")
        return DeepLink(channel_id=self.channel_id, params="&".join(params))

    def extract_from_url(
        self,
        url: str,
        title: str | None = None,
        description: str | None = None,
    ) -> RokuContent | None:
        return None

    async def search(self, query: str) -> list[RokuContent]:
        """Search the Emby library for movies and episodes.

        Raises:
            SearchProviderError: on network failure, non-2xx status or
                an unparseable body.
        """
        url = f"{self._server_url}/Users/{self._user_id}/Items"
        params = {
            "searchTerm": query,
            "recursive": "true",
            "limit": SEARCH_LIMIT,
            "fields": _SEARCH_FIELDS,
            "includeItemTypes": _ITEM_TYPES,
        }
        log.debug("emby_search_started", query=query)
        try:
            resp = await self._http.get(
                url, params=params, headers={"X-Emby-Token": self._api_key}
            )
        except httpx.HTTPError as exc:
            raise SearchProviderError("emby", f"request failed: {exc!s}") from exc

        if not resp.is_success:
            raise SearchProviderError(
                "emby",
                f"search failed with HTTP {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise SearchProviderError("emby", "invalid JSON in search response") from exc

        items = (data.get("Items") or []) if isinstance(data, dict) else []
        results = [
            content
            for content in (self._item_to_content(item) for item in items)
            if content is not None
        ]
        log.info("emby_search_completed", query=query, result_count=len(results))
        return results

    # ------------------------------------------------------------------
    # Response mapping
    # ------------------------------------------------------------------

    def _item_to_content(self, item: dict[str, Any]) -> RokuContent | None:
        item_id = item.get("Id")
        if not item_id:
            log.debug("emby_item_without_id", item_name=item.get("Name"))
            return None

        user_data = item.get("UserData") or {}
        image_tags = item.get("ImageTags") or {}
        metadata: dict[str, Any] = {
            "server_id": item.get("ServerId"),
            "item_type": item.get("Type"),
            "series_name": item.get("SeriesName"),
            "season_number": item.get("ParentIndexNumber"),
            "episode_number": item.get("IndexNumber"),
            "year": item.get("ProductionYear"),
            "overview": item.get("Overview"),
            "image_url": self._image_url(item_id, image_tags.get("Primary")),
            "resume_position_ticks": user_data.get("PlaybackPositionTicks"),
            "runtime_ticks": item.get("RunTimeTicks"),
            "played_percentage": user_data.get("PlayedPercentage"),
            "is_favorite": user_data.get("IsFavorite"),
            "community_rating": item.get("CommunityRating"),
            "official_rating": item.get("OfficialRating"),
            "genres": item.get("Genres"),
        }
        return RokuContent(
            channel_id=self.channel_id,
            content_id=str(item_id),
            media_type=item.get("Type"),
            title=self._build_title(item),
            channel_name=self.channel_name,
            metadata={k: v for k, v in metadata.items() if v not in (None, "")},
        )

    @staticmethod
    def _build_title(item: dict[str, Any]) -> str:
        name = item.get("Name") or ""
        item_type = item.get("Type")
        if item_type == "Episode":
            return (
                f"{item.get('SeriesName')} - "
                f"S{item.get('ParentIndexNumber')}E{item.get('IndexNumber')} - {name}"
            )
        if item_type == "Movie":
            year = item.get("ProductionYear")
            return f"{name} ({year})" if year else name
        return name

    def _image_url(self, item_id: str, tag: str | None) -> str:
        if not tag:
            return ""
        return f"{self._server_url}/Items/{item_id}/Images/Primary?tag={tag}"

    def __repr__(self) -> str:
        return f"EmbyChannelPlugin(server={self._server_url!r})"
