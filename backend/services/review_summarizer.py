"""
Review summarization stage.

Feeds the numbered snippet list to Gemini and returns its three-paragraph
summary untouched. Citation numbers are checked only for logging; an
out-of-range citation is reported, never corrected.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Sequence

from backend.agents.reviews.prompts import build_review_summary_prompt
from backend.schemas.reviews import ReviewSnippet
from backend.services.exceptions import EmptyInputError, ModelCallError
from backend.services.model_caller import ResilientModelCaller, response_text

logger = logging.getLogger(__name__)

# "(1)", "(1, 3)", "(2,4, 5)"
_CITATION_GROUP = re.compile(r"\((\s*\d+(?:\s*,\s*\d+)*\s*)\)")


@dataclass(frozen=True)
class Summary:
    text: str


def extract_citations(text: str) -> List[int]:
    """Return every cited number in order of appearance."""
    citations: List[int] = []
    for group in _CITATION_GROUP.findall(text):
        citations.extend(int(number) for number in group.split(","))
    return citations


def find_invalid_citations(text: str, snippet_count: int) -> List[int]:
    """Return cited numbers outside [1, snippet_count]."""
    return [n for n in extract_citations(text) if n < 1 or n > snippet_count]


class ReviewSummarizer:
    """Stage 4 of the review pipeline."""

    def __init__(self, model_caller: ResilientModelCaller):
        self._model_caller = model_caller

    async def summarize(self, product_name: str, snippets: Sequence[ReviewSnippet]) -> Summary:
        """
        Summarize review snippets for a product.

        Raises:
            EmptyInputError: If snippets is empty
            ModelCallError: If Gemini answers without any summary text
        """
        if not snippets:
            raise EmptyInputError(f"No review snippets to summarize for '{product_name}'")

        prompt = build_review_summary_prompt(product_name, snippets)
        response = await self._model_caller.call(prompt)
        text = response_text(response)
        if not text.strip():
            logger.error(f"Gemini returned no summary text for '{product_name}'")
            raise ModelCallError(f"Gemini returned no summary text for '{product_name}'")

        invalid = find_invalid_citations(text, len(snippets))
        if invalid:
            logger.warning(
                f"Summary for '{product_name}' cites {sorted(set(invalid))} "
                f"but only {len(snippets)} sources exist"
            )

        logger.info(f"Summarized {len(snippets)} snippets for '{product_name}'")
        return Summary(text=text)
