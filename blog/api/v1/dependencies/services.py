"""Use case dependencies (composition root).

Read paths get a plain session (get_db); write paths get the
transactional session (get_db_transactional).
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from blog.application.interfaces.services import ICacheStore
from blog.application.services.invalidation import InvalidationCoordinator
from blog.application.services.user_service import UserService
from blog.application.use_cases.comments import CommentService
from blog.application.use_cases.engagement import EngagementService
from blog.application.use_cases.posts import PostService
from blog.core.config import get_settings
from blog.infrastructure.persistence.database import get_db, get_db_transactional
from blog.infrastructure.persistence.repositories import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)

from .auth import AuthSecurity, get_auth_security
from .db import get_cache, get_invalidator


def _cache_ttl() -> int:
    return get_settings().cache_default_ttl


def _post_service(
    db: AsyncSession, cache: ICacheStore | None, invalidator: InvalidationCoordinator
) -> PostService:
    return PostService(PostRepository(db), invalidator, cache=cache, cache_ttl=_cache_ttl())


async def get_post_reader(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[ICacheStore | None, Depends(get_cache)],
    invalidator: Annotated[InvalidationCoordinator, Depends(get_invalidator)],
) -> PostService:
    """Post service for cached reads (list, all, detail)."""
    return _post_service(db, cache, invalidator)


async def get_post_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cache: Annotated[ICacheStore | None, Depends(get_cache)],
    invalidator: Annotated[InvalidationCoordinator, Depends(get_invalidator)],
) -> PostService:
    """Post service for writes (create, update, status, delete, bulk delete)."""
    return _post_service(db, cache, invalidator)


async def get_engagement_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    invalidator: Annotated[InvalidationCoordinator, Depends(get_invalidator)],
) -> EngagementService:
    return EngagementService(PostRepository(db), LikeRepository(db), invalidator)


async def get_comment_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cache: Annotated[ICacheStore | None, Depends(get_cache)],
    invalidator: Annotated[InvalidationCoordinator, Depends(get_invalidator)],
) -> CommentService:
    """Comment service (reads and writes share the transactional session)."""
    return CommentService(
        CommentRepository(db),
        PostRepository(db),
        invalidator,
        cache=cache,
        cache_ttl=_cache_ttl(),
    )


async def get_user_service(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    cache: Annotated[ICacheStore | None, Depends(get_cache)],
    invalidator: Annotated[InvalidationCoordinator, Depends(get_invalidator)],
    auth_security: Annotated[AuthSecurity, Depends(get_auth_security)],
) -> UserService:
    settings = get_settings()
    invite = settings.admin_invite_code
    return UserService(
        UserRepository(db),
        auth_security,
        invalidator,
        cache=cache,
        cache_ttl=settings.cache_default_ttl,
        admin_invite_code=invite.get_secret_value() if invite else None,
        max_page_limit=settings.max_page_limit,
    )
