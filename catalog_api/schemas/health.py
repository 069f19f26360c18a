"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["healthy", "unhealthy"] = Field(description="Overall service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    timestamp: str = Field(description="Check time, RFC 3339")
    services: dict[str, Literal["healthy", "unhealthy"]] = Field(
        default_factory=dict,
        description="Per-dependency status (api, database)",
    )
