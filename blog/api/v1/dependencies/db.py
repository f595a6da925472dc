"""DB session and cache dependencies (composition root)."""

from __future__ import annotations

from fastapi import Request

from blog.application.interfaces.services import ICacheStore
from blog.application.services.invalidation import InvalidationCoordinator
from blog.infrastructure.persistence.database import get_db, get_db_transactional


def get_cache(request: Request) -> ICacheStore | None:
    """Process cache from app.state (None when caching is disabled)."""
    return getattr(request.app.state, "cache", None)


def get_invalidator(request: Request) -> InvalidationCoordinator:
    """Invalidation coordinator over the process cache."""
    return InvalidationCoordinator(get_cache(request))


__all__ = ["get_cache", "get_db", "get_db_transactional", "get_invalidator"]
