"""Post repository: filtered/sorted listing, CRUD and atomic engagement counters.

Interface methods return application DTOs. Counters (views, likes) are only
changed by single UPDATE statements evaluated by the database, never by
read-modify-write in Python.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from blog.application.dtos.post import (
    AuthorSummary,
    PostCreate,
    PostListQuery,
    PostResult,
)
from blog.domain.enums import PostSortField, PostStatusFilter, SortDirection
from blog.domain.exceptions import ResourceNotFoundException
from blog.infrastructure.persistence.models.comment import Comment
from blog.infrastructure.persistence.models.post import Post
from blog.infrastructure.persistence.models.post_like import PostLike
from blog.infrastructure.persistence.models.user import User
from blog.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_guard,
)
from blog.shared.utils.datetime import ensure_utc

_SORT_COLUMNS: dict[PostSortField, tuple[Any, ...]] = {
    PostSortField.CREATED_AT: (Post.created_at,),
    PostSortField.UPDATED_AT: (Post.updated_at,),
    PostSortField.TITLE: (Post.title,),
    PostSortField.AUTHOR: (User.first_name, User.last_name),
    PostSortField.VIEWS: (Post.views,),
    PostSortField.LIKES: (Post.likes,),
}


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term matches literally (escape char is backslash)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _author_to_summary(user: User) -> AuthorSummary:
    return AuthorSummary(id=user.id, first_name=user.first_name, last_name=user.last_name)


def _post_to_result(post: Post, author: User | None = None) -> PostResult:
    """Map ORM Post (author loaded or passed in) to PostResult."""
    author = author if author is not None else post.author
    return PostResult(
        id=post.id,
        title=post.title,
        content=post.content,
        published=post.published,
        author_id=post.author_id,
        tags=tuple(post.tags or ()),
        views=post.views,
        likes=post.likes,
        created_at=ensure_utc(post.created_at),
        updated_at=ensure_utc(post.updated_at),
        author=_author_to_summary(author),
    )


class PostRepository(BaseRepository[Post]):
    """Post storage. Listing follows PostListQuery; deletes take comments and likes along."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Post)

    def _with_author(self) -> Select[tuple[Post]]:
        return select(Post).join(Post.author).options(contains_eager(Post.author))

    @staticmethod
    def _apply_filters(stmt: Select[Any], query: PostListQuery) -> Select[Any]:
        if query.status == PostStatusFilter.PUBLISHED:
            stmt = stmt.where(Post.published.is_(True))
        elif query.status == PostStatusFilter.UNPUBLISHED:
            stmt = stmt.where(Post.published.is_(False))
        if query.search:
            pattern = f"%{escape_like(query.search)}%"
            stmt = stmt.where(
                or_(
                    Post.title.ilike(pattern, escape="\\"),
                    Post.content.ilike(pattern, escape="\\"),
                )
            )
        return stmt

    @staticmethod
    def _ordering(query: PostListQuery) -> list[Any]:
        columns = _SORT_COLUMNS[query.sort_field]
        if query.sort_dir == SortDirection.ASC:
            ordering = [c.asc() for c in columns]
        else:
            ordering = [c.desc() for c in columns]
        # Ties (equal timestamps, counters, titles) resolve the same way every time.
        ordering.append(Post.id.asc())
        return ordering

    @storage_guard("get post")
    async def get_by_id(self, post_id: str) -> PostResult | None:
        result = await self.db.execute(self._with_author().where(Post.id == post_id))
        post = result.scalar_one_or_none()
        return _post_to_result(post) if post else None

    @storage_guard("find posts")
    async def find_posts(self, query: PostListQuery) -> list[PostResult]:
        stmt = self._apply_filters(self._with_author(), query)
        stmt = stmt.order_by(*self._ordering(query)).offset(query.skip).limit(query.limit)
        result = await self.db.execute(stmt)
        return [_post_to_result(p) for p in result.scalars().all()]

    @storage_guard("count posts")
    async def count_posts(self, query: PostListQuery) -> int:
        stmt = self._apply_filters(select(func.count()).select_from(Post), query)
        result = await self.db.execute(stmt)
        return result.scalar_one()

    @storage_guard("list all posts")
    async def list_all(self) -> list[PostResult]:
        stmt = self._with_author().order_by(Post.created_at.desc(), Post.id.asc())
        result = await self.db.execute(stmt)
        return [_post_to_result(p) for p in result.scalars().all()]

    @storage_guard("create post")
    async def create_post(self, author_id: str, data: PostCreate) -> PostResult:
        author = await self.db.get(User, author_id)
        if author is None:
            raise ResourceNotFoundException("user", author_id)
        post = Post(
            author_id=author_id,
            title=data.title,
            content=data.content,
            published=data.published,
            tags=list(data.tags),
        )
        self.db.add(post)
        await self.db.flush()
        return _post_to_result(post, author)

    @storage_guard("update post")
    async def update_post(self, post_id: str, changes: dict[str, Any]) -> PostResult | None:
        result = await self.db.execute(self._with_author().where(Post.id == post_id))
        post = result.scalar_one_or_none()
        if post is None:
            return None
        for field, value in changes.items():
            setattr(post, field, value)
        await self.db.flush()
        return _post_to_result(post)

    async def _delete_dependents(self, post_ids: Any) -> None:
        """Remove comments and like relations for the given post id selection."""
        await self.db.execute(delete(Comment).where(Comment.post_id.in_(post_ids)))
        await self.db.execute(delete(PostLike).where(PostLike.post_id.in_(post_ids)))

    @storage_guard("delete post")
    async def delete_post(self, post_id: str) -> PostResult | None:
        result = await self.db.execute(self._with_author().where(Post.id == post_id))
        post = result.scalar_one_or_none()
        if post is None:
            return None
        deleted = _post_to_result(post)
        await self._delete_dependents([post_id])
        await self.db.delete(post)
        await self.db.flush()
        return deleted

    @storage_guard("bulk delete posts")
    async def delete_posts(self, post_ids: list[str] | None) -> int:
        """Delete the listed posts, or every post when post_ids is None."""
        if post_ids is None:
            await self.db.execute(delete(Comment))
            await self.db.execute(delete(PostLike))
            result = await self.db.execute(delete(Post))
        else:
            if not post_ids:
                return 0
            await self._delete_dependents(post_ids)
            result = await self.db.execute(delete(Post).where(Post.id.in_(post_ids)))
        return result.rowcount or 0

    @storage_guard("check post")
    async def exists(self, post_id: str) -> bool:
        result = await self.db.execute(select(Post.id).where(Post.id == post_id))
        return result.scalar_one_or_none() is not None

    async def _bump(self, post_id: str, *criteria: Any, **values: Any) -> int:
        # Counters do not touch updated_at.
        stmt = (
            update(Post)
            .where(Post.id == post_id, *criteria)
            .values(updated_at=Post.updated_at, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)
        return result.rowcount or 0

    @storage_guard("increment views")
    async def increment_views(self, post_id: str) -> bool:
        return await self._bump(post_id, views=Post.views + 1) == 1

    @storage_guard("increment likes")
    async def increment_likes(self, post_id: str) -> None:
        await self._bump(post_id, likes=Post.likes + 1)

    @storage_guard("decrement likes")
    async def decrement_likes(self, post_id: str) -> None:
        await self._bump(post_id, Post.likes > 0, likes=Post.likes - 1)

    @storage_guard("read likes")
    async def get_likes(self, post_id: str) -> int | None:
        result = await self.db.execute(select(Post.likes).where(Post.id == post_id))
        return result.scalar_one_or_none()
