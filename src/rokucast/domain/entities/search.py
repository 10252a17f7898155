from __future__ import annotations

from dataclasses import dataclass

from rokucast.domain.plugins.base import SearchResult

MANUAL_SOURCE = "manual"


@dataclass(frozen=True)
class SearchQuery:
    query: str
    limit: int | None = None  # None = configured default
    plugin_name: str | None = None  # None = all plugins


@dataclass(frozen=True)
class SearchResponse:
    query: str
    results: list[SearchResult]

    @property
    def total_results(self) -> int:
        return len(self.results)


class SearchError(Exception):
    """Base error for search use cases."""


class SearchBadRequest(SearchError):
    pass
