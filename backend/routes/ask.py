"""
FastAPI route for the product review endpoint.

Endpoints:
- POST /api/ask: Detect the product in a prompt and summarize its reviews

Authentication and rate limiting are handled upstream; this router only
validates the payload, runs the pipeline and maps its outcome.
"""

from typing import Optional

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from backend.config import settings
from backend.schemas.reviews import AskRequest, AskResponse, ErrorResponse
from backend.services.background import BackgroundTaskRunner
from backend.services.exceptions import PipelineUnavailableError, ReviewPipelineError
from backend.services.review_pipeline import ReviewPipeline, build_review_pipeline
from backend.utils.logging import get_logger

logger = get_logger(__name__)

GENERIC_FAILURE_MESSAGE = "Failed to generate a product review summary."

router = APIRouter(
    prefix="/api",
    tags=["reviews"]
)

# Shared by every request; drained on application shutdown
background_runner = BackgroundTaskRunner()

_review_pipeline: Optional[ReviewPipeline] = None


def get_review_pipeline() -> ReviewPipeline:
    """
    Lazily build the shared ReviewPipeline.

    Raises:
        PipelineUnavailableError: If the pipeline clients cannot be created
    """
    global _review_pipeline

    if _review_pipeline is None:
        try:
            _review_pipeline = build_review_pipeline(settings, background=background_runner)
        except Exception as e:
            logger.error(f"Review pipeline not configured: {e}")
            raise PipelineUnavailableError("Review pipeline is not configured") from e

    return _review_pipeline


def failure_response() -> JSONResponse:
    """The single failure payload returned for every pipeline error."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=GENERIC_FAILURE_MESSAGE).model_dump(),
    )


@router.post(
    "/ask",
    response_model=AskResponse,
    status_code=status.HTTP_200_OK,
    responses={500: {"model": ErrorResponse}},
    summary="Summarize reviews for the product in a prompt",
    description="""
    Detects the product mentioned in `prompt`, searches the web for reviews
    and returns a three-paragraph summary with numeric citations.

    **Flow:**
    1. Extract product name (Gemini) - no product -> failure
    2. Plan 3 review search queries (Gemini) - none -> failure
    3. Search each query (SerpAPI organic results)
    4. Summarize with citations into `searchData` (Gemini)
    5. Save product + chat, then source rows in the background

    Every failure returns HTTP 500 with the same generic `error` message.
    """
)
async def ask_endpoint(
    request: AskRequest,
    pipeline: ReviewPipeline = Depends(get_review_pipeline),
):
    """
    Review summary endpoint.

    - Parse/Validate: Handled by Pydantic AskRequest
    - Run pipeline: ReviewPipeline.run (extract, plan, search, summarize, persist)
    - Map output: PipelineResult -> AskResponse, errors -> ErrorResponse
    """
    logger.info(
        f"POST /api/ask called for chat_id={request.chat_id}, "
        f"prompt='{request.prompt[:50]}...'"
    )

    try:
        result = await pipeline.run(
            prompt=request.prompt,
            chat_id=request.chat_id,
            user_id=request.user_id,
        )
    except ReviewPipelineError as e:
        logger.warning(
            f"Review pipeline failed for chat_id={request.chat_id}: "
            f"{type(e).__name__}: {e}"
        )
        return failure_response()
    except Exception as e:
        logger.exception(f"Unexpected error in review pipeline for chat_id={request.chat_id}: {e}")
        return failure_response()

    logger.info(
        f"Returning summary for '{result.product_name}' with {len(result.sources)} sources"
    )

    return AskResponse(
        response=result.summary.text,
        search_data=list(result.sources),
    )
