"""Health check API schemas."""

from pydantic import Field

from blog.schemas.common import APIModel


class HealthResponse(APIModel):
    """Response for GET /health (liveness)."""

    status: str = Field(default="ok", description="Service status")


class CacheStatsResponse(APIModel):
    """Process cache diagnostics for GET /health/cache."""

    enabled: bool
    entries: int = 0
    hits: int = 0
    misses: int = 0
    sets: int = 0
    evictions: int = 0
