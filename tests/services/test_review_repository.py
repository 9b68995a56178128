"""
Tests for the Supabase review repository.

Tests follow the same approach as the other service tests:
- Mock Supabase client interactions
- Verify table names, payloads and conflict keys
- Verify primary write failures raise PersistenceError
"""

import httpx
import pytest
from unittest.mock import MagicMock

from postgrest.exceptions import APIError

from backend.schemas.reviews import ReviewSnippet
from backend.services.exceptions import PersistenceError
from backend.services.review_repository import ReviewRepository


def postgrest_error(message: str = "boom") -> APIError:
    return APIError({"message": message, "code": "500", "hint": None, "details": None})


@pytest.fixture
def snippet():
    return ReviewSnippet(
        title="XYZ Phone review",
        link="https://review.example/xyz",
        snippet="Solid phone.",
    )


class TestUpsertProduct:
    """Tests for ReviewRepository.upsert_product."""

    @pytest.mark.asyncio
    async def test_upserts_by_name_and_returns_id(self, supabase_client):
        supabase_client.table.return_value.upsert.return_value.execute.return_value = MagicMock(
            data=[{"id": 42, "name": "XYZ Phone", "summary": "text"}]
        )

        product_id = await ReviewRepository(supabase_client).upsert_product("XYZ Phone", "text")

        assert product_id == 42
        supabase_client.table.assert_called_with("products")
        supabase_client.table.return_value.upsert.assert_called_once_with(
            {"name": "XYZ Phone", "summary": "text"}, on_conflict="name"
        )

    @pytest.mark.asyncio
    async def test_no_rows_raises(self, supabase_client):
        supabase_client.table.return_value.upsert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(PersistenceError):
            await ReviewRepository(supabase_client).upsert_product("XYZ Phone", "text")

    @pytest.mark.asyncio
    async def test_api_error_raises_persistence_error(self, supabase_client):
        error = postgrest_error("permission denied")
        supabase_client.table.return_value.upsert.return_value.execute.side_effect = error

        with pytest.raises(PersistenceError) as exc_info:
            await ReviewRepository(supabase_client).upsert_product("XYZ Phone", "text")

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_connection_error_raises_persistence_error(self, supabase_client):
        error = httpx.ConnectError("connection refused")
        supabase_client.table.return_value.upsert.return_value.execute.side_effect = error

        with pytest.raises(PersistenceError) as exc_info:
            await ReviewRepository(supabase_client).upsert_product("XYZ Phone", "text")

        assert exc_info.value.__cause__ is error


class TestMarkChatReady:
    """Tests for ReviewRepository.mark_chat_ready."""

    @pytest.mark.asyncio
    async def test_updates_chat_by_id(self, supabase_client):
        update = supabase_client.table.return_value.update
        update.return_value.eq.return_value.execute.return_value = MagicMock(data=[{"id": "chat-1"}])

        await ReviewRepository(supabase_client).mark_chat_ready("chat-1", 42, "summary")

        supabase_client.table.assert_called_with("chats")
        update.assert_called_once_with({"product_id": 42, "summary": "summary", "status": "ready"})
        update.return_value.eq.assert_called_once_with("id", "chat-1")

    @pytest.mark.asyncio
    async def test_missing_chat_is_not_an_error(self, supabase_client):
        update = supabase_client.table.return_value.update
        update.return_value.eq.return_value.execute.return_value = MagicMock(data=[])

        await ReviewRepository(supabase_client).mark_chat_ready("missing", 42, "summary")

    @pytest.mark.asyncio
    async def test_api_error_raises_persistence_error(self, supabase_client):
        update = supabase_client.table.return_value.update
        update.return_value.eq.return_value.execute.side_effect = postgrest_error()

        with pytest.raises(PersistenceError):
            await ReviewRepository(supabase_client).mark_chat_ready("chat-1", 42, "summary")

    @pytest.mark.asyncio
    async def test_timeout_raises_persistence_error(self, supabase_client):
        update = supabase_client.table.return_value.update
        update.return_value.eq.return_value.execute.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(PersistenceError):
            await ReviewRepository(supabase_client).mark_chat_ready("chat-1", 42, "summary")


class TestSourceRows:
    """Tests for the per-source writes."""

    @pytest.mark.asyncio
    async def test_product_source_upsert(self, supabase_client, snippet):
        await ReviewRepository(supabase_client).save_product_source(42, snippet)

        supabase_client.table.assert_called_with("product_sources")
        supabase_client.table.return_value.upsert.assert_called_once_with(
            {
                "product_id": 42,
                "source_name": "XYZ Phone review",
                "source_url": "https://review.example/xyz",
                "source_snippet": "Solid phone.",
            },
            on_conflict="product_id,source_url",
        )

    @pytest.mark.asyncio
    async def test_chat_source_insert(self, supabase_client, snippet):
        await ReviewRepository(supabase_client).save_chat_source("chat-1", snippet)

        supabase_client.table.assert_called_with("chat_sources")
        supabase_client.table.return_value.insert.assert_called_once_with(
            {
                "chat_id": "chat-1",
                "source_name": "XYZ Phone review",
                "source_url": "https://review.example/xyz",
                "source_snippet": "Solid phone.",
            }
        )

    @pytest.mark.asyncio
    async def test_source_write_errors_propagate_to_caller(self, supabase_client, snippet):
        supabase_client.table.return_value.insert.return_value.execute.side_effect = postgrest_error()

        with pytest.raises(APIError):
            await ReviewRepository(supabase_client).save_chat_source("chat-1", snippet)
