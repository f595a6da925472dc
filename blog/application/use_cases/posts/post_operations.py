"""Post operations: cached reads, create/update/delete with cache invalidation."""

from __future__ import annotations

import logging
from typing import Any, cast

from blog.application.dtos.post import (
    PostCreate,
    PostListQuery,
    PostPage,
    PostResult,
    PostUpdate,
)
from blog.application.interfaces.repositories import IPostRepository
from blog.application.interfaces.services import ICacheInvalidator, ICacheStore
from blog.application.services.cache_keys import (
    all_posts_key,
    post_detail_key,
    post_list_key_for,
)
from blog.application.services.payloads import (
    post_from_cached,
    post_page_from_cached,
    post_page_to_dict,
    post_to_dict,
    posts_from_cached,
    posts_to_list,
)
from blog.application.services.read_through import ReadThroughCache
from blog.application.use_cases.posts.post_query import PostQueryEngine
from blog.core.constants import POST_MAX_TAGS, POST_TAG_MAX_LENGTH, POST_TITLE_MAX_LENGTH
from blog.domain.enums import MutationKind
from blog.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)


def validate_tags(tags: Any) -> tuple[str, ...]:
    """Return tags as a tuple of stripped strings; raise ValidationException otherwise."""
    if not isinstance(tags, (list, tuple)):
        raise ValidationException("tags must be an array of strings", field="tags")
    cleaned: list[str] = []
    for tag in tags:
        if not isinstance(tag, str):
            raise ValidationException("tags must be an array of strings", field="tags")
        tag = tag.strip()
        if not tag:
            continue
        if len(tag) > POST_TAG_MAX_LENGTH:
            raise ValidationException(
                f"tag longer than {POST_TAG_MAX_LENGTH} characters", field="tags"
            )
        cleaned.append(tag)
    if len(cleaned) > POST_MAX_TAGS:
        raise ValidationException(f"at most {POST_MAX_TAGS} tags allowed", field="tags")
    return tuple(cleaned)


def _require_text(value: Any, field: str, max_length: int | None = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{field} is required", field=field)
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationException(
            f"{field} must be at most {max_length} characters", field=field
        )
    return value


class PostService:
    """Read and write posts. Reads go through the cache; writes commit, then invalidate."""

    def __init__(
        self,
        post_repo: IPostRepository,
        invalidator: ICacheInvalidator,
        cache: ICacheStore | None = None,
        cache_ttl: int | None = None,
    ) -> None:
        self.post_repo = post_repo
        self.invalidator = invalidator
        self.cache = ReadThroughCache(cache, ttl=cache_ttl)
        self.query_engine = PostQueryEngine(post_repo)

    async def list_posts(self, query: PostListQuery) -> PostPage:
        """Return one page of the filtered/sorted listing (cached per normalized query)."""
        page = await self.cache.fetch(
            post_list_key_for(query),
            lambda: self.query_engine.query(query),
            post_page_to_dict,
            post_page_from_cached,
        )
        return cast(PostPage, page)

    async def list_all_posts(self) -> list[PostResult]:
        """Return every post, newest first (cached)."""
        posts = await self.cache.fetch(
            all_posts_key(),
            self.post_repo.list_all,
            posts_to_list,
            posts_from_cached,
        )
        return posts or []

    async def get_post(self, post_id: str) -> PostResult:
        """Return post detail (cached); raise ResourceNotFoundException if absent."""
        post = await self.cache.fetch(
            post_detail_key(post_id),
            lambda: self.post_repo.get_by_id(post_id),
            post_to_dict,
            post_from_cached,
        )
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        return post

    async def create_post(
        self,
        author_id: str,
        title: Any,
        content: Any,
        published: bool = False,
        tags: Any = None,
    ) -> PostResult:
        data = PostCreate(
            title=_require_text(title, "title", POST_TITLE_MAX_LENGTH),
            content=_require_text(content, "content"),
            published=bool(published),
            tags=validate_tags(tags) if tags is not None else (),
        )
        post = await self.post_repo.create_post(author_id, data)
        await self.post_repo.commit()
        await self.invalidator.invalidate(MutationKind.POST_CREATED, post.id)
        logger.info("Post created: %s by %s", post.id, author_id)
        return post

    async def update_post(
        self,
        post_id: str,
        title: Any = None,
        content: Any = None,
        published: bool | None = None,
        tags: Any = None,
    ) -> PostResult:
        """Apply a partial update; None fields are left unchanged."""
        update = PostUpdate(
            title=_require_text(title, "title", POST_TITLE_MAX_LENGTH) if title is not None else None,
            content=_require_text(content, "content") if content is not None else None,
            published=published,
            tags=validate_tags(tags) if tags is not None else None,
        )
        post = await self.post_repo.update_post(post_id, update.changes())
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        await self.post_repo.commit()
        await self.invalidator.invalidate(MutationKind.POST_UPDATED, post_id)
        return post

    async def set_published(self, post_id: str, published: bool) -> PostResult:
        """Publish or unpublish; invalidates like any other update."""
        return await self.update_post(post_id, published=published)

    async def delete_post(self, post_id: str) -> PostResult:
        """Delete a post with its comments and likes."""
        post = await self.post_repo.delete_post(post_id)
        if post is None:
            raise ResourceNotFoundException("post", post_id)
        await self.post_repo.commit()
        await self.invalidator.invalidate(MutationKind.POST_DELETED, post_id)
        logger.info("Post deleted: %s", post_id)
        return post

    async def bulk_delete(self, post_ids: list[str] | None = None) -> int:
        """Delete the given posts (every post when post_ids is None); invalidate once."""
        if post_ids is not None:
            post_ids = list(dict.fromkeys(post_ids))
        deleted = await self.post_repo.delete_posts(post_ids)
        await self.post_repo.commit()
        await self.invalidator.invalidate(MutationKind.POSTS_BULK_DELETED)
        logger.info("Bulk delete removed %s posts", deleted)
        return deleted
