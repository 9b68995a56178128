"""
Resilient Gemini caller.

Wraps google-genai's async generate_content with bounded exponential
backoff. Transient failures (network errors with no HTTP status, 429, 500,
503) are retried; everything else fails immediately.

Retry schedule with the defaults (base_delay=0.5s, max_attempts=5):
    attempt 1 fails -> wait 0.5s
    attempt 2 fails -> wait 1.0s
    attempt 3 fails -> wait 2.0s
    attempt 4 fails -> wait 4.0s
    attempt 5 fails -> ModelCallError
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, FrozenSet, Optional

from google import genai
from google.genai import errors, types

from backend.config import settings
from backend.services.exceptions import ModelCallError

logger = logging.getLogger(__name__)

RETRYABLE_STATUSES: FrozenSet[int] = frozenset({429, 500, 503})


def _status_of(error: BaseException) -> Optional[int]:
    """Return the HTTP status carried by an error, or None if there is none."""
    if isinstance(error, errors.APIError):
        return error.code

    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def is_retryable(status: Optional[int]) -> bool:
    """No status means the request never got a response."""
    return status is None or status in RETRYABLE_STATUSES


def response_text(response: types.GenerateContentResponse) -> str:
    """
    Extract the text of a Gemini response, or "" when there is none.

    Joins every text part of the first candidate, skipping thought parts.
    Falls back to response.text only when the candidate carries no parts.
    """
    if response.candidates:
        candidate = response.candidates[0]
        if candidate.content and candidate.content.parts:
            return "".join(
                part.text
                for part in candidate.content.parts
                if part.text and not part.thought
            )

    return response.text or ""


class ResilientModelCaller:
    """
    Calls Gemini with bounded retry.

    Holds no per-request state, so one instance is shared by every request.
    """

    def __init__(
        self,
        client: genai.Client,
        *,
        default_model: Optional[str] = None,
        max_attempts: Optional[int] = None,
        base_delay: Optional[float] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self._client = client
        self.default_model = default_model or settings.GEMINI_MODEL
        self.max_attempts = max_attempts if max_attempts is not None else settings.MODEL_MAX_ATTEMPTS
        self.base_delay = base_delay if base_delay is not None else settings.MODEL_RETRY_BASE_DELAY
        self._sleep = sleep

        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    async def call(
        self,
        contents: Any,
        model_id: Optional[str] = None,
        config: Optional[types.GenerateContentConfig] = None,
    ) -> types.GenerateContentResponse:
        """
        Send a prompt to Gemini, retrying transient failures.

        Args:
            contents: Prompt payload passed through to generate_content
            model_id: Gemini model name (defaults to settings.GEMINI_MODEL)
            config: Optional generation config

        Returns:
            The first successful GenerateContentResponse

        Raises:
            ModelCallError: On a non-retryable error or once max_attempts
                is reached. The last error is chained as __cause__.
        """
        model = model_id or self.default_model
        delay = self.base_delay
        attempt = 0

        while True:
            attempt += 1
            try:
                return await self._client.aio.models.generate_content(
                    model=model,
                    contents=contents,
                    config=config,
                )
            except Exception as e:
                status = _status_of(e)

                if not is_retryable(status) or attempt >= self.max_attempts:
                    logger.error(
                        f"Gemini call to {model} failed after {attempt} attempt(s) "
                        f"(status {status}): {e}"
                    )
                    raise ModelCallError(
                        f"Gemini call failed after {attempt} attempt(s)",
                        cause=e,
                        status=status,
                        attempts=attempt,
                    ) from e

                logger.warning(
                    f"Attempt {attempt} failed (status {status}). "
                    f"Retrying in {delay}s... cause: {e}"
                )

                await self._sleep(delay)
                delay *= 2
