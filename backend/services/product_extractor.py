"""
Product extraction stage.

Turns a free-form user query into a product name using Gemini. The model
answers with the literal "None" when it sees no product; that sentinel is
converted into ProductNotFound here and never travels further.
"""

import logging
import re
from dataclasses import dataclass
from typing import Union

from backend.agents.reviews.prompts import (
    NO_PRODUCT_SENTINEL,
    build_product_extraction_prompt,
)
from backend.services.model_caller import ResilientModelCaller, response_text

logger = logging.getLogger(__name__)

_SURROUNDING_QUOTES = re.compile(r"^[\"'\s]+|[\"'\s]+$")
_NO_PRODUCT_PATTERN = re.compile(r"None\.?|No product.*", re.IGNORECASE)


@dataclass(frozen=True)
class ProductFound:
    name: str


@dataclass(frozen=True)
class ProductNotFound:
    raw_text: str = ""


ProductLookup = Union[ProductFound, ProductNotFound]


def normalize_product_text(raw: str) -> str:
    """
    Clean a raw extraction answer.

    Strips surrounding quotes and whitespace, then maps "None", "None." and
    any "No product ..." phrasing (case-insensitive) to the exact sentinel.
    """
    text = _SURROUNDING_QUOTES.sub("", raw)
    if _NO_PRODUCT_PATTERN.fullmatch(text):
        return NO_PRODUCT_SENTINEL
    return text


class ProductExtractor:
    """Stage 1 of the review pipeline."""

    def __init__(self, model_caller: ResilientModelCaller):
        self._model_caller = model_caller

    async def extract(self, query: str) -> ProductLookup:
        """
        Extract the product name(s) mentioned in a user query.

        Multiple products come back comma-joined in a single ProductFound.
        """
        response = await self._model_caller.call(build_product_extraction_prompt(query))
        raw = response_text(response)
        name = normalize_product_text(raw)

        if not name or name == NO_PRODUCT_SENTINEL:
            logger.info("No product detected in query")
            return ProductNotFound(raw_text=raw)

        logger.info(f"Detected product: '{name}'")
        return ProductFound(name=name)
