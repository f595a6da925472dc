"""Comment thread operations: create, list (cached), update, delete."""

from __future__ import annotations

from typing import Any

from blog.application.dtos.comment import CommentResult
from blog.application.interfaces.repositories import ICommentRepository, IPostRepository
from blog.application.interfaces.services import ICacheInvalidator, ICacheStore
from blog.application.services.cache_keys import post_comments_key
from blog.application.services.payloads import comments_from_cached, comments_to_list
from blog.application.services.read_through import ReadThroughCache
from blog.core.constants import COMMENT_MAX_LENGTH
from blog.domain.enums import MutationKind
from blog.domain.exceptions import ResourceNotFoundException, ValidationException


def normalize_content(content: Any) -> str:
    """Return trimmed comment content; raise ValidationException if empty or too long."""
    if not isinstance(content, str) or not content.strip():
        raise ValidationException("Comment content cannot be empty", field="content")
    content = content.strip()
    if len(content) > COMMENT_MAX_LENGTH:
        raise ValidationException(
            f"Comment must be at most {COMMENT_MAX_LENGTH} characters", field="content"
        )
    return content


class CommentService:
    """Comments owned by a post. Results embed only the author's id and name."""

    def __init__(
        self,
        comment_repo: ICommentRepository,
        post_repo: IPostRepository,
        invalidator: ICacheInvalidator,
        cache: ICacheStore | None = None,
        cache_ttl: int | None = None,
    ) -> None:
        self.comment_repo = comment_repo
        self.post_repo = post_repo
        self.invalidator = invalidator
        self.cache = ReadThroughCache(cache, ttl=cache_ttl)

    async def create(self, post_id: str, user_id: str, content: Any) -> CommentResult:
        text = normalize_content(content)
        if not await self.post_repo.exists(post_id):
            raise ResourceNotFoundException("post", post_id)
        comment = await self.comment_repo.create_comment(post_id, user_id, text)
        await self.comment_repo.commit()
        await self.invalidator.invalidate(MutationKind.COMMENT_CREATED, post_id)
        return comment

    async def list_by_post(self, post_id: str) -> list[CommentResult]:
        """Return the thread oldest first; an unknown post has an empty thread."""
        comments = await self.cache.fetch(
            post_comments_key(post_id),
            lambda: self.comment_repo.list_by_post(post_id),
            comments_to_list,
            comments_from_cached,
        )
        return comments or []

    async def get_comment(self, comment_id: str) -> CommentResult:
        comment = await self.comment_repo.get_by_id(comment_id)
        if comment is None:
            raise ResourceNotFoundException("comment", comment_id)
        return comment

    async def update(self, comment_id: str, content: Any) -> CommentResult:
        text = normalize_content(content)
        comment = await self.comment_repo.update_content(comment_id, text)
        if comment is None:
            raise ResourceNotFoundException("comment", comment_id)
        await self.comment_repo.commit()
        await self.invalidator.invalidate(MutationKind.COMMENT_UPDATED, comment.post_id)
        return comment

    async def delete(self, comment_id: str) -> CommentResult:
        comment = await self.comment_repo.delete_comment(comment_id)
        if comment is None:
            raise ResourceNotFoundException("comment", comment_id)
        await self.comment_repo.commit()
        await self.invalidator.invalidate(MutationKind.COMMENT_DELETED, comment.post_id)
        return comment
