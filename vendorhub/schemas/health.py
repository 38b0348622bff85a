"""Health check API schemas."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response for GET /health."""

    status: str = Field(default="ok", description="Service status")
    cache: str = Field(default="unavailable", description="available or unavailable")
