"""
Error taxonomy for the review pipeline.

Every error raised by the pipeline derives from ReviewPipelineError so the
HTTP boundary can collapse them into one generic failure response.
"""

from typing import Optional


class ReviewPipelineError(Exception):
    """Base class for all review pipeline failures."""


class ModelCallError(ReviewPipelineError):
    """
    Gemini call failed after exhausting retries, on a non-retryable error,
    or returned no text where text is required.

    Attributes:
        cause: The last underlying exception (also chained as __cause__)
        status: HTTP status of the last failure, or None for network errors
        attempts: Number of attempts made before giving up
    """

    def __init__(
        self,
        message: str,
        cause: Optional[BaseException] = None,
        status: Optional[int] = None,
        attempts: int = 0,
    ):
        super().__init__(message)
        self.cause = cause
        self.status = status
        self.attempts = attempts


class NoProductDetectedError(ReviewPipelineError):
    """The user query does not mention an identifiable product."""


class NoSearchQueriesError(ReviewPipelineError):
    """The query planner produced no usable search queries."""


class EmptyInputError(ReviewPipelineError):
    """The summarizer was given nothing to summarize."""


class NoSearchResultsError(EmptyInputError):
    """Every planned search query came back without organic results."""


class PersistenceError(ReviewPipelineError):
    """Writing the product or chat record to Supabase failed."""


class PipelineUnavailableError(ReviewPipelineError):
    """The pipeline could not be constructed (missing keys or clients)."""
