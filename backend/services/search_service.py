"""
Web search fan-out for review snippets.

Uses SerpAPI (serpapi.GoogleSearch) and keeps only organic results. Ads,
knowledge panels, shopping carousels and the rest of the SERP are ignored.
"""

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

from serpapi import GoogleSearch

from backend.config import settings
from backend.schemas.reviews import ReviewSnippet

logger = logging.getLogger(__name__)


def parse_organic_results(results: Dict[str, Any]) -> List[ReviewSnippet]:
    """Map SerpAPI organic_results to snippets, preserving provider rank."""
    organic: List[Dict[str, Any]] = results.get("organic_results") or []

    return [
        ReviewSnippet(
            title=item.get("title") or "",
            link=item.get("link") or "",
            snippet=item.get("snippet") or "",
        )
        for item in organic
    ]


class SerpSearchClient:
    """
    Thin async wrapper around serpapi.GoogleSearch.

    The SerpAPI SDK is blocking, so each request runs in a worker thread.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        result_count: Optional[int] = None,
        search_factory: Callable[[Dict[str, Any]], Any] = GoogleSearch,
    ):
        key = api_key or settings.SERP_API_KEY
        if not key:
            raise ValueError("SERP API key missing. Provide api_key or set SERP_API_KEY.")

        self._api_key = key
        self.result_count = result_count if result_count is not None else settings.SEARCH_RESULT_COUNT
        self._search_factory = search_factory

    def _fetch(self, query: str) -> Dict[str, Any]:
        params = {
            "q": query,
            "api_key": self._api_key,
            "num": self.result_count,
        }
        return self._search_factory(params).get_dict()

    async def search(self, query: str) -> List[ReviewSnippet]:
        """
        Run one search and return its organic results.

        A response without organic results, or one that SerpAPI flags with
        an "error" message, yields an empty list.
        """
        results = await asyncio.to_thread(self._fetch, query)

        if results.get("error"):
            logger.warning(f"SerpAPI returned an error for '{query}': {results['error']}")
            return []

        snippets = parse_organic_results(results)
        logger.info(f"Found {len(snippets)} organic results for '{query}'")
        return snippets


class SearchAggregator:
    """Stage 3 of the review pipeline: one search per planned query."""

    def __init__(self, search_client: SerpSearchClient):
        self._search_client = search_client

    async def aggregate(self, queries: Sequence[str]) -> List[ReviewSnippet]:
        """
        Search every query concurrently and concatenate the results.

        Output order is query order, then provider rank within a query.
        Duplicate links across queries are kept because citation numbers
        are positional.
        """
        per_query = await asyncio.gather(
            *(self._search_client.search(query) for query in queries)
        )

        aggregated: List[ReviewSnippet] = []
        for snippets in per_query:
            aggregated.extend(snippets)

        logger.info(f"Aggregated {len(aggregated)} snippets from {len(queries)} queries")
        return aggregated
