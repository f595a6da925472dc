"""Fixtures that seed users and posts straight into the test database."""

from collections.abc import Awaitable, Callable
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.enums import UserRole
from blog.infrastructure.persistence.models import Comment, Post
from blog.infrastructure.persistence.repositories import UserRepository

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[str]]:
    async def _make_user(
        first_name: str, last_name: str, role: UserRole = UserRole.USER
    ) -> str:
        repo = UserRepository(db_session)
        user = await repo.create_user(
            first_name=first_name,
            last_name=last_name,
            email=f"{first_name}.{last_name}@example.com",
            hashed_password="not-a-hash",
            role=role,
        )
        await repo.commit()
        db_session.expunge_all()
        return user.id

    return _make_user


@pytest.fixture
def make_post(db_session: AsyncSession) -> Callable[..., Awaitable[str]]:
    """Insert a post; ``minutes`` offsets created_at from a fixed base time."""

    async def _make_post(
        author_id: str,
        title: str = "Title",
        content: str = "Body",
        *,
        published: bool = True,
        minutes: int = 0,
        post_id: str | None = None,
        **counters: int,
    ) -> str:
        created = BASE_TIME + timedelta(minutes=minutes)
        post = Post(
            author_id=author_id,
            title=title,
            content=content,
            published=published,
            tags=[],
            created_at=created,
            updated_at=created,
            **counters,
        )
        if post_id is not None:
            post.id = post_id
        db_session.add(post)
        await db_session.commit()
        new_id = post.id
        db_session.expunge_all()
        return new_id

    return _make_post


@pytest.fixture
def make_comment(db_session: AsyncSession) -> Callable[..., Awaitable[str]]:
    async def _make_comment(
        post_id: str,
        user_id: str,
        content: str = "comment",
        *,
        minutes: int = 0,
        comment_id: str | None = None,
    ) -> str:
        created = BASE_TIME + timedelta(minutes=minutes)
        comment = Comment(
            post_id=post_id,
            user_id=user_id,
            content=content,
            created_at=created,
            updated_at=created,
        )
        if comment_id is not None:
            comment.id = comment_id
        db_session.add(comment)
        await db_session.commit()
        new_id = comment.id
        db_session.expunge_all()
        return new_id

    return _make_comment
