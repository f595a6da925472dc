"""Engagement counters: like toggle and view registration.

The like counter stays in lock-step with like relations without in-process
locks: the relation insert/delete is the compare-and-set, and the counter
only moves when that statement actually changed a row. A toggle that loses
a race against a concurrent toggle for the same (user, post) pair reports
the state the winner produced and leaves the counter alone.
"""

from __future__ import annotations

import logging

from blog.application.dtos.engagement import LikeToggleResult
from blog.application.interfaces.repositories import ILikeRepository, IPostRepository
from blog.application.interfaces.services import ICacheInvalidator
from blog.domain.enums import MutationKind
from blog.domain.exceptions import ResourceNotFoundException

logger = logging.getLogger(__name__)


class EngagementService:
    """toggle_like, has_liked and register_view. Only the post detail entry is invalidated."""

    def __init__(
        self,
        post_repo: IPostRepository,
        like_repo: ILikeRepository,
        invalidator: ICacheInvalidator,
    ) -> None:
        self.post_repo = post_repo
        self.like_repo = like_repo
        self.invalidator = invalidator

    async def toggle_like(self, post_id: str, user_id: str) -> LikeToggleResult:
        """Flip the caller's like on post_id; return the post's like count and new state."""
        if not await self.post_repo.exists(post_id):
            raise ResourceNotFoundException("post", post_id)

        if await self.like_repo.exists(user_id, post_id):
            if await self.like_repo.remove(user_id, post_id):
                await self.post_repo.decrement_likes(post_id)
            else:
                logger.debug("Unlike race on post %s user %s: already removed", post_id, user_id)
            liked = False
        else:
            if await self.like_repo.insert_if_absent(user_id, post_id):
                await self.post_repo.increment_likes(post_id)
            else:
                logger.debug("Like race on post %s user %s: already liked", post_id, user_id)
            liked = True

        await self.post_repo.commit()
        await self.invalidator.invalidate(MutationKind.LIKE_TOGGLED, post_id)
        likes = await self.post_repo.get_likes(post_id)
        if likes is None:
            raise ResourceNotFoundException("post", post_id)
        return LikeToggleResult(likes=likes, liked=liked)

    async def has_liked(self, post_id: str, user_id: str) -> bool:
        """Return True if user_id currently likes post_id."""
        return await self.like_repo.exists(user_id, post_id)

    async def register_view(self, post_id: str) -> None:
        """Add one view to post_id. No deduplication by caller or time window."""
        if not await self.post_repo.increment_views(post_id):
            raise ResourceNotFoundException("post", post_id)
        await self.post_repo.commit()
        await self.invalidator.invalidate(MutationKind.VIEW_REGISTERED, post_id)
