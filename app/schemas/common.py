"""Shared response envelopes."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Uniform error body for every non-2xx response."""

    error: str = Field(..., description="Human-readable error message")
