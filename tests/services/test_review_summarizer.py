"""
Tests for the review summarization stage and citation helpers.
"""

import logging

import pytest
from google.genai import types

from backend.agents.reviews.prompts import build_review_context
from backend.services.exceptions import EmptyInputError, ModelCallError
from backend.services.review_summarizer import (
    ReviewSummarizer,
    Summary,
    extract_citations,
    find_invalid_citations,
)

SUMMARY_TEXT = (
    "Reviewers consistently praise the XYZ Phone's low-light camera and bright "
    "display (1, 3).\n\n"
    "Battery life is the most common complaint, with heavy users struggling to "
    "finish a day (2), and charging is described as slow (3).\n\n"
    "Overall, the XYZ Phone is worth considering for photography, but battery-"
    "conscious buyers should look elsewhere (1, 2, 3)."
)


class TestReviewContext:
    """Tests for the numbered context block."""

    def test_numbers_snippets_from_one_in_input_order(self, snippets):
        lines = build_review_context(snippets).split("\n")

        assert lines == [
            "(1) XYZ Phone review: the camera to beat - Outstanding low-light photos "
            "and a bright display. [https://www.youtube.com/watch?v=xyz123]",
            "(2) r/phones - XYZ Phone after 3 months - Battery barely lasts a day "
            "with heavy use. [https://www.reddit.com/r/phones/comments/xyz]",
            "(3) Amazon.com: Customer reviews: XYZ Phone - 4.3 out of 5 stars. "
            "Great value but slow charging. [https://www.amazon.com/product-reviews/B0XYZ]",
        ]


class TestCitations:
    """Tests for extract_citations / find_invalid_citations."""

    def test_extracts_single_and_grouped_citations(self):
        assert extract_citations(SUMMARY_TEXT) == [1, 3, 2, 3, 1, 2, 3]

    def test_ignores_non_numeric_parentheses(self):
        assert extract_citations("Great value (for the price) overall (2).") == [2]

    def test_all_citations_in_range(self):
        assert find_invalid_citations(SUMMARY_TEXT, 3) == []

    def test_out_of_range_citations(self):
        text = "Great camera (1, 4) but weak battery (0)."
        assert find_invalid_citations(text, 3) == [4, 0]

    def test_no_citations(self):
        assert extract_citations("No citations at all.") == []


class TestReviewSummarizer:
    """Tests for ReviewSummarizer.summarize."""

    @pytest.mark.asyncio
    async def test_empty_snippets_raise_without_calling_model(self, model_caller):
        with pytest.raises(EmptyInputError):
            await ReviewSummarizer(model_caller).summarize("XYZ Phone", [])

        model_caller.call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_returns_model_text_unmodified(self, model_caller, gemini_response, snippets):
        model_caller.call.return_value = gemini_response(SUMMARY_TEXT)

        summary = await ReviewSummarizer(model_caller).summarize("XYZ Phone", snippets)

        assert summary == Summary(text=SUMMARY_TEXT)

    @pytest.mark.asyncio
    async def test_prompt_contains_numbered_context(self, model_caller, gemini_response, snippets):
        model_caller.call.return_value = gemini_response(SUMMARY_TEXT)

        await ReviewSummarizer(model_caller).summarize("XYZ Phone", snippets)

        prompt = model_caller.call.await_args.args[0]
        assert 'Summarize the reviews of "XYZ Phone"' in prompt
        assert "**three consecutive paragraphs**" in prompt
        assert build_review_context(snippets) in prompt

    @pytest.mark.asyncio
    async def test_out_of_range_citation_is_logged_not_rejected(
        self, model_caller, gemini_response, snippets, caplog
    ):
        text = "Great camera (1, 7)."
        model_caller.call.return_value = gemini_response(text)

        with caplog.at_level(logging.WARNING, logger="backend.services.review_summarizer"):
            summary = await ReviewSummarizer(model_caller).summarize("XYZ Phone", snippets)

        assert summary.text == text
        assert "cites [7] but only 3 sources exist" in caplog.text

    @pytest.mark.asyncio
    async def test_reply_without_text_raises(self, model_caller, snippets):
        model_caller.call.return_value = types.GenerateContentResponse()

        with pytest.raises(ModelCallError):
            await ReviewSummarizer(model_caller).summarize("XYZ Phone", snippets)

    @pytest.mark.asyncio
    async def test_whitespace_only_reply_raises(self, model_caller, gemini_response, snippets):
        model_caller.call.return_value = gemini_response("  \n\n ")

        with pytest.raises(ModelCallError):
            await ReviewSummarizer(model_caller).summarize("XYZ Phone", snippets)
