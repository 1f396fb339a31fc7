"""
Error response schemas for API endpoints.

Every failure is reported as {"error": {"type": ..., "message": ...}} so
clients can branch on a stable `type` identifier.
"""
from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Machine-readable error type plus a human-readable message."""

    type: str = Field(description="Error type identifier, e.g. 'bookmark-does-not-exist'")
    message: str = Field(description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Envelope for all error responses."""

    error: ErrorDetail
