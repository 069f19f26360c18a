"""Shared response envelopes."""

from typing import Any

from pydantic import BaseModel


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete or password change."""

    message: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response produced by the app's error handlers."""

    detail: str
    # Field-level parse errors, only for malformed request bodies.
    errors: list[dict[str, Any]] | None = None
    # Exception summary, only for unexpected errors in dev.
    error: str | None = None
