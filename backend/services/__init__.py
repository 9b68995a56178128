"""
Service layer for the product review backend.

Contains the review pipeline and its stages:
- Calls Gemini through the resilient model caller (retry/backoff)
- Fans search queries out to SerpAPI
- Maps stage outputs into typed results and pipeline errors
- Handles persistence coordination (Supabase primary + best-effort writes)

Services act as the glue between routes (HTTP layer) and external providers.
"""

from .background import BackgroundTaskRunner
from .exceptions import (
    EmptyInputError,
    ModelCallError,
    NoProductDetectedError,
    NoSearchQueriesError,
    NoSearchResultsError,
    PersistenceError,
    PipelineUnavailableError,
    ReviewPipelineError,
)
from .model_caller import ResilientModelCaller
from .product_extractor import ProductExtractor, ProductFound, ProductNotFound
from .query_planner import QueryPlanner
from .review_pipeline import PipelineResult, ReviewPipeline, build_review_pipeline
from .review_repository import ReviewRepository
from .review_summarizer import ReviewSummarizer, Summary
from .search_service import SearchAggregator, SerpSearchClient

__all__ = [
    "BackgroundTaskRunner",
    "ResilientModelCaller",
    "ProductExtractor",
    "ProductFound",
    "ProductNotFound",
    "QueryPlanner",
    "SearchAggregator",
    "SerpSearchClient",
    "ReviewSummarizer",
    "Summary",
    "ReviewRepository",
    "ReviewPipeline",
    "PipelineResult",
    "build_review_pipeline",
    "ReviewPipelineError",
    "ModelCallError",
    "NoProductDetectedError",
    "NoSearchQueriesError",
    "EmptyInputError",
    "NoSearchResultsError",
    "PersistenceError",
    "PipelineUnavailableError",
]
