"""
Pydantic schemas for the product review endpoint.

These models define the request/response contract of POST /api/ask and
the ReviewSnippet record shared by the search and summary stages.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# ============================================================================
# SHARED MODELS
# ============================================================================

class ReviewSnippet(BaseModel):
    """
    A single organic search result used as review evidence.

    Snippets are numbered by their position in the aggregated list, and
    those 1-based positions are what the summary cites, so instances are
    immutable once created.
    """
    model_config = ConfigDict(frozen=True)

    title: str = Field(
        ...,
        description="Title of the search result page",
        examples=["XYZ Phone review: great camera, poor battery"]
    )
    link: str = Field(
        ...,
        description="URL of the search result",
        examples=["https://www.reddit.com/r/phones/comments/abc123"]
    )
    snippet: str = Field(
        "",
        description="Short excerpt returned by the search provider",
        examples=["After two weeks with the XYZ Phone the battery barely lasts a day..."]
    )


# ============================================================================
# REQUEST MODELS
# ============================================================================

class AskRequest(BaseModel):
    """
    Request to summarize reviews for the product mentioned in a prompt.

    Field names follow the chat client's camelCase payload.
    """
    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(
        ...,
        description="User's free-form question mentioning a product",
        min_length=1,
        max_length=2000,
        examples=["is the XYZ Phone worth it"]
    )
    chat_id: Union[int, str] = Field(
        ...,
        alias="chatId",
        description="Identifier of the chat record to update with the result",
        examples=["6f1c2d9e-7b1a-4f8e-9a53-0c2b8f4e1d77"]
    )
    user_id: Optional[Union[int, str]] = Field(
        None,
        alias="userId",
        description="Identifier of the user who sent the prompt",
    )


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class AskResponse(BaseModel):
    """
    Successful review summary.

    `response` is the three-paragraph summary; its parenthetical citation
    numbers index into `searchData` starting at 1.
    """
    model_config = ConfigDict(populate_by_name=True)

    response: str = Field(
        ...,
        description="Three-paragraph review summary with numeric citations"
    )
    search_data: List[ReviewSnippet] = Field(
        ...,
        alias="searchData",
        description="Sources in citation order"
    )


class ErrorResponse(BaseModel):
    """Generic failure payload. Never carries internal error details."""
    error: str = Field(
        ...,
        examples=["Failed to generate a product review summary."]
    )
