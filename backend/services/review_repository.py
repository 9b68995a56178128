"""
Review persistence service.

Writes pipeline results to Supabase:
- products: one row per product name (upserted), holding the latest summary
- chats: the originating chat, linked to the product and marked "ready"
- product_sources / chat_sources: one row per cited snippet

Product and chat writes are primary: failures raise PersistenceError and
abort the response. Source rows are written best-effort by the caller.
"""

import asyncio
import logging
from typing import Any, Dict, List, Union, cast

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from backend.schemas.reviews import ReviewSnippet
from backend.services.exceptions import PersistenceError

logger = logging.getLogger(__name__)

ChatId = Union[int, str]


def _describe(error: Exception) -> str:
    # postgrest errors carry the server message; transport errors do not
    return getattr(error, "message", None) or repr(error)


def _source_row(snippet: ReviewSnippet) -> Dict[str, Any]:
    return {
        "source_name": snippet.title,
        "source_url": snippet.link,
        "source_snippet": snippet.snippet,
    }


class ReviewRepository:
    """
    Supabase access for products, chats and their sources.

    The supabase-py client is blocking, so every call runs in a worker
    thread to keep the event loop free.
    """

    def __init__(self, supabase_client: Client):
        self._client = supabase_client

    async def upsert_product(self, name: str, summary: str) -> Any:
        """
        Insert or update a product by name and return its id.

        Raises:
            PersistenceError: If Supabase rejects the write, is unreachable,
                or returns no row
        """
        def _write():
            return (
                self._client.table("products")
                .upsert({"name": name, "summary": summary}, on_conflict="name")
                .execute()
            )

        try:
            result = await asyncio.to_thread(_write)
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Failed to upsert product '{name}': {_describe(e)}")
            raise PersistenceError(f"Failed to upsert product '{name}'") from e

        rows: List[Dict[str, Any]] = cast(List[Dict[str, Any]], result.data or [])
        if not rows:
            logger.error(f"Product upsert for '{name}' returned no rows")
            raise PersistenceError(f"Product upsert for '{name}' returned no rows")

        product_id = rows[0]["id"]
        logger.info(f"Product '{name}' saved with id={product_id}")
        return product_id

    async def mark_chat_ready(self, chat_id: ChatId, product_id: Any, summary: str) -> None:
        """
        Link a chat to its product and store the summary.

        Raises:
            PersistenceError: If Supabase rejects the update or is unreachable
        """
        def _write():
            return (
                self._client.table("chats")
                .update({"product_id": product_id, "summary": summary, "status": "ready"})
                .eq("id", chat_id)
                .execute()
            )

        try:
            result = await asyncio.to_thread(_write)
        except (APIError, httpx.HTTPError) as e:
            logger.error(f"Failed to update chat {chat_id}: {_describe(e)}")
            raise PersistenceError(f"Failed to update chat {chat_id}") from e

        if not result.data:
            logger.warning(f"Chat {chat_id} update matched no rows")
        else:
            logger.info(f"Chat {chat_id} marked ready with product_id={product_id}")

    async def save_product_source(self, product_id: Any, snippet: ReviewSnippet) -> None:
        """Upsert a source row keyed by (product_id, source_url)."""
        row = {"product_id": product_id, **_source_row(snippet)}

        def _write():
            return (
                self._client.table("product_sources")
                .upsert(row, on_conflict="product_id,source_url")
                .execute()
            )

        await asyncio.to_thread(_write)

    async def save_chat_source(self, chat_id: ChatId, snippet: ReviewSnippet) -> None:
        """Insert a source row for a chat."""
        row = {"chat_id": chat_id, **_source_row(snippet)}

        def _write():
            return self._client.table("chat_sources").insert(row).execute()

        await asyncio.to_thread(_write)
