"""Aggregated search across all media plugins."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

import structlog

from rokucast.domain.entities.content import ChannelInfo
from rokucast.domain.entities.search import (
    MANUAL_SOURCE,
    SearchBadRequest,
    SearchQuery,
    SearchResponse,
)
from rokucast.domain.plugins import (
    ChannelInfoProvider,
    ManualSearchInstructions,
    MediaPluginProtocol,
    SearchResult,
)
from rokucast.domain.ports import PluginRegistryPort

log = structlog.get_logger(__name__)

MANUAL_TITLE = "Can't find it?"
MANUAL_DESCRIPTION = "Search manually on your streaming services"


def _key(result: SearchResult) -> str | None:
    return result.dedup_key or None


def deduplicate_results(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Collapse results that share a dedup key.

    A result without ``url`` (native to a channel) replaces one with a
    ``url`` (web hit); otherwise the first one seen is kept.  The winner
    takes the position where its key first appeared.  Results without
    a key are never collapsed, even when their titles match.
    """
    slots: list[SearchResult] = []
    index_by_key: dict[str, int] = {}

    for result in results:
        key = _key(result)
        if key is None:
            slots.append(result)
            continue
        index = index_by_key.get(key)
        if index is None:
            index_by_key[key] = len(slots)
            slots.append(result)
            continue
        if slots[index].is_external and not result.is_external:
            slots[index] = result

    return slots


def build_manual_entry(channels: Iterable[ChannelInfo]) -> SearchResult:
    """Synthetic trailing entry pointing at each channel's own search."""
    return SearchResult(
        title=MANUAL_TITLE,
        content=ManualSearchInstructions(channels=tuple(channels)),
        url=None,
        source=MANUAL_SOURCE,
        description=MANUAL_DESCRIPTION,
    )


class SearchAllUseCase:
    """Fans a query out to media plugins and merges the results.

    Flow:
        1. Validate query and resolve the optional plugin filter
        2. Search every target plugin concurrently (per-plugin timeout)
        3. Deduplicate, preferring channel-native results over web hits
        4. Truncate to the limit
        5. Append the manual search entry when it applies
    """

    def __init__(
        self,
        plugins: PluginRegistryPort,
        *,
        default_limit: int = 20,
        plugin_timeout: float = 10.0,
    ) -> None:
        self.plugins: PluginRegistryPort = plugins
        self._default_limit = default_limit
        self._plugin_timeout = plugin_timeout

    async def execute(self, q: SearchQuery) -> SearchResponse:
        """Run an aggregated search.

        Raises:
            SearchBadRequest: blank query or non-positive limit.
            PluginNotFoundError: ``plugin_name`` is not registered.
        """
        query = (q.query or "").strip()
        if not query:
            raise SearchBadRequest("Query parameter 'q' is required")
        limit = q.limit if q.limit is not None else self._default_limit
        if limit < 1:
            raise SearchBadRequest("limit must be >= 1")

        if q.plugin_name is not None:
            targets = [self.plugins.get(q.plugin_name)]
        else:
            targets = self.plugins.all()

        log.info(
            "search_all_started",
            query=query,
            limit=limit,
            plugins=[p.name for p in targets],
        )

        collected = await self._search_plugins(targets, query, limit)
        results = deduplicate_results(collected)[:limit]

        if results:
            manual = self._manual_entry(targets)
            if manual is not None:
                results.append(manual)

        log.info(
            "search_all_completed",
            query=query,
            collected=len(collected),
            returned=len(results),
        )
        return SearchResponse(query=query, results=results)

    async def _search_plugins(
        self,
        plugins: list[MediaPluginProtocol],
        query: str,
        limit: int,
    ) -> list[SearchResult]:
        """Search all plugins in parallel; failures yield no results."""

        async def _search_one(plugin: MediaPluginProtocol) -> list[SearchResult]:
            try:
                results = await asyncio.wait_for(
                    plugin.search(query, limit),
                    timeout=self._plugin_timeout,
                )
            except TimeoutError:
                log.warning(
                    "search_plugin_timeout",
                    plugin=plugin.name,
                    timeout=self._plugin_timeout,
                )
                return []
            except Exception:
                log.warning("search_plugin_failed", plugin=plugin.name, exc_info=True)
                return []
            log.info("search_plugin_completed", plugin=plugin.name, count=len(results))
            return results

        results_per_plugin = await asyncio.gather(*(_search_one(p) for p in plugins))

        all_results: list[SearchResult] = []
        for results in results_per_plugin:
            all_results.extend(results)
        return all_results

    @staticmethod
    def _manual_entry(targets: list[MediaPluginProtocol]) -> SearchResult | None:
        channel_based = [p for p in targets if getattr(p, "channel_based", False)]
        if not channel_based:
            return None
        channels: list[ChannelInfo] = []
        for plugin in channel_based:
            if isinstance(plugin, ChannelInfoProvider):
                channels.extend(plugin.channel_info())
        return build_manual_entry(channels)
