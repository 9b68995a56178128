"""
AI Components for the product review backend.

Review Pipeline (Prompt Chaining)
   - Three single-shot Gemini calls: product extraction, search query
     planning, review summarization
   - NOT an ADK agent - uses the Google Gen AI SDK directly
   - Prompts in: backend/agents/reviews/prompts.py
   - Orchestration in: backend/services/review_pipeline.py
"""

from backend.agents.reviews import (
    NO_PRODUCT_SENTINEL,
    build_product_extraction_prompt,
    build_review_summary_prompt,
    build_search_queries_prompt,
)

__all__ = [
    "NO_PRODUCT_SENTINEL",
    "build_product_extraction_prompt",
    "build_search_queries_prompt",
    "build_review_summary_prompt",
]
