"""Port for external web search providers."""

from __future__ import annotations

from typing import Protocol

from rokucast.domain.entities.content import RokuContent


class StreamingSearchPort(Protocol):
    """Finds streaming content on public channel sites via web search.

    Returned content carries ``metadata["original_url"]``, the web hit it
    was extracted from.
    """

    name: str

    async def search_streaming(
        self, query: str, max_results: int = 10
    ) -> list[RokuContent]: ...
