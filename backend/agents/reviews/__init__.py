"""
Review Pipeline - Prompt Chaining Architecture

This module contains the prompt templates for the Gemini-based review
summarization pipeline.

The service layer is in:
- backend/services/review_pipeline.py (orchestration)
- backend/services/product_extractor.py, query_planner.py,
  review_summarizer.py (one Gemini call each)
"""

from backend.agents.reviews.prompts import (
    NO_PRODUCT_SENTINEL,
    build_product_extraction_prompt,
    build_review_context,
    build_review_summary_prompt,
    build_search_queries_prompt,
)

__all__ = [
    "NO_PRODUCT_SENTINEL",
    "build_product_extraction_prompt",
    "build_review_context",
    "build_review_summary_prompt",
    "build_search_queries_prompt",
]
