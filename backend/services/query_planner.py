"""
Search query planning stage.

Asks Gemini for review-oriented search queries and parses them from the
plain-text answer.
"""

import logging
from typing import List, Optional

from backend.agents.reviews.prompts import build_search_queries_prompt
from backend.config import settings
from backend.services.model_caller import ResilientModelCaller, response_text

logger = logging.getLogger(__name__)


def parse_search_queries(text: str, limit: int = 3) -> List[str]:
    """
    Parse one query per line, keeping the last `limit` non-empty lines.

    Taking the tail drops any preamble the model adds before the queries.

    Example:
        >>> parse_search_queries("Here you go:\\nq1\\nq2\\nq3")
        ['q1', 'q2', 'q3']
    """
    lines = [line.strip() for line in text.splitlines()]
    queries = [line for line in lines if line]
    return queries[-limit:] if limit > 0 else []


class QueryPlanner:
    """Stage 2 of the review pipeline."""

    def __init__(self, model_caller: ResilientModelCaller, query_count: Optional[int] = None):
        self._model_caller = model_caller
        self.query_count = query_count if query_count is not None else settings.SEARCH_QUERY_COUNT

    async def plan(self, product_name: str) -> List[str]:
        """
        Generate search queries for a product.

        Returns at most `query_count` queries; fewer (possibly none) when
        the model output is short.
        """
        prompt = build_search_queries_prompt(product_name, self.query_count)
        response = await self._model_caller.call(prompt)
        queries = parse_search_queries(response_text(response), self.query_count)

        logger.info(f"Generated {len(queries)} search queries: {queries}")
        return queries
