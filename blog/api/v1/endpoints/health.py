"""Health check endpoints. Liveness plus process cache diagnostics."""

from fastapi import APIRouter, Request

from blog.schemas.health import CacheStatsResponse, HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get("/cache", response_model=CacheStatsResponse)
def cache_stats(request: Request) -> CacheStatsResponse:
    """Hit/miss/set/eviction counters of this instance's cache."""
    cache = getattr(request.app.state, "cache", None)
    if cache is None:
        return CacheStatsResponse(enabled=False)
    stats = cache.stats
    return CacheStatsResponse(
        enabled=True,
        entries=len(cache),
        hits=stats.hits,
        misses=stats.misses,
        sets=stats.sets,
        evictions=stats.evictions,
    )
