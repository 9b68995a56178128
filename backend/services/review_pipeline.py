"""
Review Pipeline - Prompt Chaining Orchestrator

Answers "is product X worth it?" style questions by chaining Gemini calls
around a web search fan-out.

Architecture:
- Pattern: Prompt Chaining (sequential stages, no speculative execution)
- Model: Gemini 2.5 Flash via ResilientModelCaller (bounded retry/backoff)
- Web Search: SerpAPI organic results (concurrent per query, ordered merge)
- Persistence: Supabase (primary writes awaited, source rows best-effort)

Flow:
1. ProductExtractor   query -> ProductFound | ProductNotFound
2. QueryPlanner       product -> up to 3 search queries
3. SearchAggregator   queries -> ordered ReviewSnippet list
4. ReviewSummarizer   product + snippets -> cited 3-paragraph Summary
5. ReviewRepository   upsert product, mark chat ready (awaited)
6. BackgroundTaskRunner  product_sources / chat_sources rows (not awaited)

Each short-circuit raises a ReviewPipelineError subclass; the HTTP layer
maps all of them to one generic failure.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

from google import genai

from backend.config import Settings, settings as default_settings
from backend.db.client import get_service_role_client
from backend.schemas.reviews import ReviewSnippet
from backend.services.background import BackgroundTaskRunner
from backend.services.exceptions import (
    NoProductDetectedError,
    NoSearchQueriesError,
    NoSearchResultsError,
)
from backend.services.model_caller import ResilientModelCaller
from backend.services.product_extractor import ProductExtractor, ProductNotFound
from backend.services.query_planner import QueryPlanner
from backend.services.review_repository import ChatId, ReviewRepository
from backend.services.review_summarizer import ReviewSummarizer, Summary
from backend.services.search_service import SearchAggregator, SerpSearchClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    product_name: str
    summary: Summary
    sources: Tuple[ReviewSnippet, ...]


class ReviewPipeline:
    """
    Sequences the review stages for one request at a time.

    All collaborators are injected; the pipeline itself keeps no
    per-request state and is shared across requests.
    """

    def __init__(
        self,
        extractor: ProductExtractor,
        planner: QueryPlanner,
        aggregator: SearchAggregator,
        summarizer: ReviewSummarizer,
        repository: ReviewRepository,
        background: BackgroundTaskRunner,
    ):
        self.extractor = extractor
        self.planner = planner
        self.aggregator = aggregator
        self.summarizer = summarizer
        self.repository = repository
        self.background = background

    async def run(
        self,
        prompt: str,
        chat_id: ChatId,
        user_id: Optional[Any] = None,
    ) -> PipelineResult:
        """
        Produce a review summary for the product mentioned in `prompt`.

        Args:
            prompt: User's free-form question
            chat_id: Chat record updated with the result
            user_id: Sender of the prompt (logged only)

        Returns:
            PipelineResult with the summary and its sources in citation order

        Raises:
            NoProductDetectedError: No product in the prompt
            NoSearchQueriesError: Planner produced no queries
            NoSearchResultsError: Every search came back empty
            ModelCallError: Gemini failed after retries
            PersistenceError: Product or chat write failed
        """
        logger.info(f"ReviewPipeline started for chat_id={chat_id}, user_id={user_id}")

        lookup = await self.extractor.extract(prompt)
        if isinstance(lookup, ProductNotFound):
            raise NoProductDetectedError("Product name not found in query")
        product_name = lookup.name

        queries = await self.planner.plan(product_name)
        if not queries:
            raise NoSearchQueriesError(f"No search queries generated for '{product_name}'")

        snippets = await self.aggregator.aggregate(queries)
        if not snippets:
            raise NoSearchResultsError(f"No search results found for '{product_name}'")

        summary = await self.summarizer.summarize(product_name, snippets)

        await self._persist(product_name, chat_id, summary, snippets)

        return PipelineResult(
            product_name=product_name,
            summary=summary,
            sources=tuple(snippets),
        )

    async def _persist(
        self,
        product_name: str,
        chat_id: ChatId,
        summary: Summary,
        snippets: Sequence[ReviewSnippet],
    ) -> None:
        product_id = await self.repository.upsert_product(product_name, summary.text)
        await self.repository.mark_chat_ready(chat_id, product_id, summary.text)

        for index, snippet in enumerate(snippets, start=1):
            self.background.submit(
                self.repository.save_product_source(product_id, snippet),
                f"product_sources #{index} for product_id={product_id}",
            )
            self.background.submit(
                self.repository.save_chat_source(chat_id, snippet),
                f"chat_sources #{index} for chat_id={chat_id}",
            )

        logger.info(f"Dispatched {len(snippets) * 2} source writes for chat_id={chat_id}")


def build_review_pipeline(
    config: Settings = default_settings,
    background: Optional[BackgroundTaskRunner] = None,
) -> ReviewPipeline:
    """
    Construct a ReviewPipeline with real Gemini, SerpAPI and Supabase clients.

    Raises:
        ValueError: If a required API key or Supabase setting is missing
    """
    if not config.GEMINI_API_KEY:
        raise ValueError("GEMINI_API_KEY not configured. Please set it in your .env file.")

    model_caller = ResilientModelCaller(
        genai.Client(api_key=config.GEMINI_API_KEY),
        default_model=config.GEMINI_MODEL,
        max_attempts=config.MODEL_MAX_ATTEMPTS,
        base_delay=config.MODEL_RETRY_BASE_DELAY,
    )
    search_client = SerpSearchClient(
        config.SERP_API_KEY,
        result_count=config.SEARCH_RESULT_COUNT,
    )
    supabase_client = get_service_role_client(
        config.SUPABASE_URL,
        config.SUPABASE_SERVICE_ROLE_KEY,
    )

    logger.info("Review pipeline clients initialized")

    return ReviewPipeline(
        extractor=ProductExtractor(model_caller),
        planner=QueryPlanner(model_caller, query_count=config.SEARCH_QUERY_COUNT),
        aggregator=SearchAggregator(search_client),
        summarizer=ReviewSummarizer(model_caller),
        repository=ReviewRepository(supabase_client),
        background=background or BackgroundTaskRunner(),
    )
