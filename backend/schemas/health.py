"""
Health check endpoint schemas.

The health endpoint is PUBLIC and never touches Gemini, SerpAPI or Supabase.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """
    Response model for GET /health endpoint.

    Used by load balancers, monitoring systems, and deployment checks.
    """

    status: str = Field(
        default="ok",
        description="Health status of the API (always 'ok' if responding)",
        examples=["ok"]
    )
    service: str = Field(
        default="product-review-backend",
        examples=["product-review-backend"]
    )
    environment: str = Field(
        ...,
        description="Value of ENVIRONMENT the process started with",
        examples=["development", "production"]
    )
