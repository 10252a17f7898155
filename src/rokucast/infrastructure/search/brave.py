"""Brave Search API client for discovering content on streaming sites.

The query is restricted with ``site:`` filters built from the public
search domains of the registered channels; private servers (Emby) have no
public domain and are skipped.  Every web hit is offered to the channels'
URL extractors and only recognized URLs become results.
"""

from __future__ import annotations

import dataclasses
from typing import Any

import httpx
import structlog

from rokucast.domain.entities.content import RokuContent
from rokucast.domain.plugins.exceptions import SearchProviderError
from rokucast.infrastructure.channels.registry import ChannelRegistry

log = structlog.get_logger(__name__)

BRAVE_SEARCH_URL = "https://api.search.brave.com/res/v1/web/search"


def build_site_query(query: str, domains: list[str]) -> str:
    """``"watch <q> (site:a OR site:b)"``, or the bare query without domains."""
    sites = [f"site:{d}" for d in domains if d]
    if not sites:
        return query
    return f"watch {query} ({' OR '.join(sites)})"


class BraveStreamingSearchProvider:
    """Async Brave web search restricted to streaming channel sites.

    Implements ``StreamingSearchPort`` from domain.ports.web_search.
    """

    name = "brave"

    def __init__(
        self,
        *,
        api_key: str | None,
        http_client: httpx.AsyncClient,
        channels: ChannelRegistry,
    ) -> None:
        self._api_key = (api_key or "").strip()
        self._http = http_client
        self._channels = channels

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    async def search_streaming(
        self, query: str, max_results: int = 10
    ) -> list[RokuContent]:
        """Search the web and map hits to channel content.

        Raises:
            SearchProviderError: network failure, non-2xx status or an
                empty/invalid body.
        """
        if not self.enabled:
            log.debug("brave_search_disabled")
            return []

        domains = self._channels.public_domains()
        if not domains:
            log.warning("brave_no_public_domains", query=query)
        site_query = build_site_query(query, domains)

        data = await self._fetch(site_query, max_results)
        results = self._extract_content(data)
        log.info(
            "brave_search_completed",
            query=query,
            result_count=len(results),
        )
        return results

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _fetch(self, site_query: str, count: int) -> dict[str, Any]:
        try:
            resp = await self._http.get(
                BRAVE_SEARCH_URL,
                params={"q": site_query, "count": count},
                headers={
                    "Accept": "application/json",
                    "X-Subscription-Token": self._api_key,
                },
            )
        except httpx.HTTPError as exc:
            raise SearchProviderError(self.name, f"request failed: {exc!s}") from exc

        if not resp.is_success:
            log.error(
                "brave_api_error",
                status=resp.status_code,
                body=resp.text[:500],
            )
            raise SearchProviderError(
                self.name,
                f"API request failed with status {resp.status_code}",
                status_code=resp.status_code,
            )

        if not resp.content:
            raise SearchProviderError(self.name, "empty response from Brave Search API")

        try:
            data = resp.json()
        except ValueError as exc:
            raise SearchProviderError(self.name, "invalid JSON from Brave Search API") from exc
        if not isinstance(data, dict):
            raise SearchProviderError(self.name, "unexpected response shape")
        return data

    def _extract_content(self, data: dict[str, Any]) -> list[RokuContent]:
        hits = (data.get("web") or {}).get("results") or []
        seen: set[tuple[str, str]] = set()
        results: list[RokuContent] = []

        for hit in hits:
            url = hit.get("url")
            if not url:
                continue
            title = hit.get("title")
            description = hit.get("description")

            content = self._channels.extract_from_url(url, title, description)
            if content is None:
                log.debug("brave_url_unmatched", url=url)
                continue

            key = (content.channel_id, content.content_id)
            if key in seen:
                continue
            seen.add(key)
            results.append(self._enrich(content, hit))

        return results

    @staticmethod
    def _enrich(content: RokuContent, hit: dict[str, Any]) -> RokuContent:
        metadata = dict(content.metadata)
        metadata["original_url"] = hit["url"]
        if hit.get("description"):
            metadata["description"] = hit["description"]
        thumbnail = (hit.get("thumbnail") or {}).get("src")
        if thumbnail:
            metadata["image_url"] = thumbnail
        return dataclasses.replace(
            content,
            title=hit.get("title") or content.title,
            metadata=metadata,
        )
