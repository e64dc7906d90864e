"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class ErrorBody(BaseModel):
    """Kind and message of a failed operation."""

    kind: str = Field(..., description="Error kind, e.g. NotFound or Forbidden")
    message: str = Field(..., description="Human-readable explanation")


class ErrorResponse(BaseModel):
    """Envelope returned by every failed request."""

    error: ErrorBody


class StatusResponse(BaseModel):
    """Acknowledgement for mutations without a payload."""

    status: str = "ok"
