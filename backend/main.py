"""
FastAPI application entry point for the product review backend.

This module creates the FastAPI app instance and registers all routers.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware

from backend.config import settings
from backend.routes.ask import background_runner, failure_response
from backend.routes.ask import router as ask_router
from backend.routes.health import router as health_router
from backend.services.exceptions import ReviewPipelineError
from backend.utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL)

logger = logging.getLogger(__name__)


def _get_cors_origins() -> list[str]:
    """
    Get allowed CORS origins based on environment.

    - ENVIRONMENT=production: Uses CORS_ALLOWED_ORIGINS env var
    - Anything else: Allows all origins for local development

    Returns:
        List of allowed origin URLs, or ["*"] for development.
    """
    if settings.is_production():
        origins = settings.CORS_ALLOWED_ORIGINS
        if origins:
            logger.info(f"CORS configured for production with {len(origins)} allowed origins")
        else:
            logger.warning(
                "CORS_ALLOWED_ORIGINS not set in production. "
                "No web origins allowed. Set CORS_ALLOWED_ORIGINS for web clients."
            )
        return origins

    logger.info(f"CORS configured for {settings.ENVIRONMENT}: allowing all origins")
    return ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Flush best-effort source writes before the process exits."""
    yield
    if background_runner.pending:
        logger.info(f"Waiting for {background_runner.pending} background task(s) to finish")
    await background_runner.drain()


# Create FastAPI app
app = FastAPI(
    title="Product Review API",
    description="Detects products in user prompts and summarizes their web reviews",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Log detailed validation errors for debugging.

    This helps diagnose 422 errors from the chat client.
    """
    logger.error(
        f"Validation error on {request.method} {request.url.path}: {exc.errors()}"
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "validation_error",
            "details": jsonable_encoder(exc.errors()),
        }
    )


@app.exception_handler(ReviewPipelineError)
async def review_pipeline_exception_handler(request: Request, exc: ReviewPipelineError):
    """Collapse pipeline errors raised outside the route body (e.g. dependencies)."""
    logger.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    return failure_response()


# Configure CORS with environment-based origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=_get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(health_router)
app.include_router(ask_router)

logger.info("FastAPI app initialized successfully")
