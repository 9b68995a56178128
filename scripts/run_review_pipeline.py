#!/usr/bin/env python3
"""
Review Pipeline Test Script

Runs the review pipeline locally against real Gemini and SerpAPI, without
starting the HTTP server. Supabase writes go to a mock client unless
--persist is given.

Usage:
    python scripts/run_review_pipeline.py
    python scripts/run_review_pipeline.py --prompt "is the Sony WH-1000XM5 worth it"
    python scripts/run_review_pipeline.py --suite
    python scripts/run_review_pipeline.py --prompt "..." --chat-id <uuid> --persist
"""

import argparse
import asyncio
import logging
import os
import sys
from typing import Optional
from unittest.mock import MagicMock

from google import genai

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.config import settings
from backend.services.background import BackgroundTaskRunner
from backend.services.exceptions import ReviewPipelineError
from backend.services.model_caller import ResilientModelCaller
from backend.services.product_extractor import ProductExtractor
from backend.services.query_planner import QueryPlanner
from backend.services.review_pipeline import (
    PipelineResult,
    ReviewPipeline,
    build_review_pipeline,
)
from backend.services.review_repository import ReviewRepository
from backend.services.review_summarizer import ReviewSummarizer
from backend.services.search_service import SearchAggregator, SerpSearchClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_mock_supabase_client() -> MagicMock:
    """
    Create a mock Supabase client that accepts every write.

    The product upsert returns a fake row so the chat update has an id.
    """
    mock_client = MagicMock()
    upsert_response = MagicMock()
    upsert_response.data = [{"id": "local-product-id", "summary": ""}]
    mock_client.table.return_value.upsert.return_value.execute.return_value = upsert_response

    update_response = MagicMock()
    update_response.data = [{"id": "local-chat-id"}]
    mock_client.table.return_value.update.return_value.eq.return_value.execute.return_value = update_response

    return mock_client


def build_local_pipeline(background: BackgroundTaskRunner) -> ReviewPipeline:
    """Real Gemini and SerpAPI, mocked Supabase."""
    model_caller = ResilientModelCaller(genai.Client(api_key=settings.GEMINI_API_KEY))
    return ReviewPipeline(
        extractor=ProductExtractor(model_caller),
        planner=QueryPlanner(model_caller),
        aggregator=SearchAggregator(SerpSearchClient(settings.SERP_API_KEY)),
        summarizer=ReviewSummarizer(model_caller),
        repository=ReviewRepository(create_mock_supabase_client()),
        background=background,
    )


def print_result(result: PipelineResult):
    """Pretty print the pipeline result."""
    print("\n" + "=" * 60)
    print(f"PRODUCT: {result.product_name}")
    print("=" * 60)
    print(f"\n{result.summary.text}\n")
    print(f"--- Sources ({len(result.sources)}) ---")
    for i, source in enumerate(result.sources, 1):
        print(f"  ({i}) {source.title}")
        print(f"      {source.link}")
    print()


async def run_test(prompt: str, chat_id: str = "local-chat-id", persist: bool = False):
    """Run the pipeline for a single prompt."""

    missing = [
        name for name, value in (
            ("GEMINI_API_KEY", settings.GEMINI_API_KEY),
            ("SERP_API_KEY", settings.SERP_API_KEY),
        ) if not value
    ]
    if missing:
        print(f"\n⚠️  ERROR: {', '.join(missing)} not set!")
        print("   Please set them in your .env file or export them.")
        return None

    print("\n" + "=" * 60)
    print("REVIEW PIPELINE TEST (Gemini + SerpAPI)")
    print("=" * 60)
    print(f"\nPrompt:   {prompt}")
    print(f"Chat ID:  {chat_id}")
    print(f"Persist:  {'Supabase' if persist else 'mock client'}")

    background = BackgroundTaskRunner()
    if persist:
        pipeline = build_review_pipeline(settings, background=background)
    else:
        pipeline = build_local_pipeline(background)

    try:
        result = await pipeline.run(prompt=prompt, chat_id=chat_id, user_id="local-user")
    except ReviewPipelineError as e:
        print(f"\n❌ Pipeline failed: {type(e).__name__}: {e}\n")
        return None
    finally:
        await background.drain()

    print_result(result)
    return result


async def run_test_suite():
    """Run a suite of predefined prompts."""

    test_cases = [
        {"name": "Single product", "prompt": "is the Sony WH-1000XM5 worth it"},
        {"name": "Conversational phrasing", "prompt": "my friend keeps telling me to get a Steam Deck OLED, thoughts?"},
        {"name": "Two products", "prompt": "iPhone 16 vs Pixel 9 camera"},
        {"name": "No product (should fail)", "prompt": "what should I eat for dinner"},
    ]

    for case in test_cases:
        print(f"\n\n>>> {case['name']}")
        await run_test(case["prompt"])


def main():
    parser = argparse.ArgumentParser(description="Run the review pipeline locally")
    parser.add_argument(
        "--prompt", "-p",
        type=str,
        help="User prompt mentioning a product"
    )
    parser.add_argument(
        "--chat-id",
        type=str,
        default="local-chat-id",
        help="Chat id to update (only meaningful with --persist)"
    )
    parser.add_argument(
        "--persist",
        action="store_true",
        help="Write results to the configured Supabase project"
    )
    parser.add_argument(
        "--suite",
        action="store_true",
        help="Run the predefined prompt suite"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    prompt: Optional[str] = args.prompt

    if args.suite:
        asyncio.run(run_test_suite())
    elif prompt:
        asyncio.run(run_test(prompt, chat_id=args.chat_id, persist=args.persist))
    else:
        print("\nNo prompt provided. Running default test...\n")
        asyncio.run(run_test("is the Nothing Phone (2a) worth it"))


if __name__ == "__main__":
    main()
