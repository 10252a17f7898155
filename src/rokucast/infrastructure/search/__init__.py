from __future__ import annotations

from .brave import BRAVE_SEARCH_URL, BraveStreamingSearchProvider, build_site_query

__all__ = ["BRAVE_SEARCH_URL", "BraveStreamingSearchProvider", "build_site_query"]
