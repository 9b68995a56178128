"""
Pytest configuration for the review backend tests.

Sets up test environment and global fixtures.
"""
import os
import pytest
from unittest.mock import AsyncMock, MagicMock

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-api-key")
os.environ.setdefault("SERP_API_KEY", "test-serp-api-key")

from google.genai import types  # noqa: E402

from backend.schemas.reviews import ReviewSnippet  # noqa: E402


def build_gemini_response(text: str) -> types.GenerateContentResponse:
    """Build a GenerateContentResponse with a single text part."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=text)])
            )
        ]
    )


@pytest.fixture
def gemini_response():
    """Factory fixture: gemini_response("text") -> GenerateContentResponse."""
    return build_gemini_response


@pytest.fixture
def model_caller(gemini_response):
    """
    Mock ResilientModelCaller.

    Tests set `model_caller.call.return_value = gemini_response("...")`.
    """
    caller = MagicMock()
    caller.call = AsyncMock(return_value=gemini_response(""))
    return caller


@pytest.fixture
def snippets():
    """Three review snippets in aggregate order."""
    return [
        ReviewSnippet(
            title="XYZ Phone review: the camera to beat",
            link="https://www.youtube.com/watch?v=xyz123",
            snippet="Outstanding low-light photos and a bright display.",
        ),
        ReviewSnippet(
            title="r/phones - XYZ Phone after 3 months",
            link="https://www.reddit.com/r/phones/comments/xyz",
            snippet="Battery barely lasts a day with heavy use.",
        ),
        ReviewSnippet(
            title="Amazon.com: Customer reviews: XYZ Phone",
            link="https://www.amazon.com/product-reviews/B0XYZ",
            snippet="4.3 out of 5 stars. Great value but slow charging.",
        ),
    ]


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client for repository tests.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client
