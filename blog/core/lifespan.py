"""Application lifespan: startup and shutdown.

Only wiring of infrastructure here (logging, process cache and its
sweeper, optional table creation, DB engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from blog.core.config import get_settings
from blog.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, cache (if enabled), tables (if enabled).
    Shutdown order: cache sweeper stop, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.cache_enabled:
        from blog.infrastructure.cache.memory_cache import CacheStore

        cache = CacheStore(
            default_ttl=settings.cache_default_ttl,
            check_period=settings.cache_check_period,
            max_entries=settings.cache_max_entries,
        )
        cache.start_sweeper()
        app.state.cache = cache
        logger.info(
            "Cache enabled (ttl=%ss, sweep every %ss)",
            settings.cache_default_ttl,
            settings.cache_check_period,
        )
    else:
        app.state.cache = None

    if settings.database_create_tables:
        from blog.infrastructure.persistence.database import create_tables

        await create_tables()

    yield

    # ---- Shutdown ----
    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.stop_sweeper()
        await app.state.cache.clear()

    from blog.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
