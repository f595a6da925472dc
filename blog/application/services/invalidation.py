"""Invalidation coordinator: maps each mutation kind to the cache entries it makes stale.

Listing entries are keyed by arbitrary parameter combinations, so they are
purged by namespace rather than by exact key. Engagement writes (views,
likes) only purge the post detail entry: listings may show slightly stale
counters until their TTL runs out.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from blog.application.interfaces.services import ICacheStore
from blog.application.services.cache_keys import (
    NS_ADMIN_USERS_LIST,
    NS_POST_COMMENTS,
    NS_POST_DETAIL,
    NS_POST_LIST,
    all_posts_key,
    post_comments_key,
    post_detail_key,
)
from blog.domain.enums import MutationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InvalidationPlan:
    """What one mutation kind purges.

    namespaces: every key in these namespaces is dropped.
    static_keys: fixed keys (no parameters).
    post_keys: builders applied to the affected post ID.
    """

    namespaces: tuple[str, ...] = ()
    static_keys: tuple[Callable[[], str], ...] = ()
    post_keys: tuple[Callable[[str], str], ...] = ()


_POST_LISTINGS = InvalidationPlan(
    namespaces=(NS_POST_LIST,),
    static_keys=(all_posts_key,),
)
_POST_CHANGED = InvalidationPlan(
    namespaces=(NS_POST_LIST,),
    static_keys=(all_posts_key,),
    post_keys=(post_detail_key,),
)
_POST_REMOVED = InvalidationPlan(
    namespaces=(NS_POST_LIST,),
    static_keys=(all_posts_key,),
    post_keys=(post_detail_key, post_comments_key),
)
_COMMENT_CHANGED = InvalidationPlan(post_keys=(post_comments_key, post_detail_key))
_ENGAGEMENT = InvalidationPlan(post_keys=(post_detail_key,))
_USERS_CHANGED = InvalidationPlan(namespaces=(NS_ADMIN_USERS_LIST,))
# Author projections are embedded in every post and comment payload.
_AUTHOR_CHANGED = InvalidationPlan(
    namespaces=(NS_ADMIN_USERS_LIST, NS_POST_LIST, NS_POST_DETAIL, NS_POST_COMMENTS),
    static_keys=(all_posts_key,),
)

INVALIDATION_PLANS: dict[MutationKind, InvalidationPlan] = {
    MutationKind.POST_CREATED: _POST_LISTINGS,
    MutationKind.POST_UPDATED: _POST_CHANGED,
    MutationKind.POST_DELETED: _POST_REMOVED,
    # Affected IDs are not enumerated; drop the per-post namespaces once.
    MutationKind.POSTS_BULK_DELETED: InvalidationPlan(
        namespaces=(NS_POST_LIST, NS_POST_DETAIL, NS_POST_COMMENTS),
        static_keys=(all_posts_key,),
    ),
    MutationKind.COMMENT_CREATED: _COMMENT_CHANGED,
    MutationKind.COMMENT_UPDATED: _COMMENT_CHANGED,
    MutationKind.COMMENT_DELETED: _COMMENT_CHANGED,
    MutationKind.VIEW_REGISTERED: _ENGAGEMENT,
    MutationKind.LIKE_TOGGLED: _ENGAGEMENT,
    MutationKind.USER_CREATED: _USERS_CHANGED,
    MutationKind.USER_UPDATED: _AUTHOR_CHANGED,
    MutationKind.USER_PASSWORD_CHANGED: _USERS_CHANGED,
    MutationKind.USER_DELETED: _AUTHOR_CHANGED,
}


class InvalidationCoordinator:
    """Purge cache entries after a committed write.

    invalidate() never raises: a stale entry is bounded by its TTL, while
    failing the user-visible write is not recoverable.
    """

    def __init__(
        self,
        cache: ICacheStore | None,
        plans: dict[MutationKind, InvalidationPlan] | None = None,
    ) -> None:
        self.cache = cache
        self.plans = plans if plans is not None else INVALIDATION_PLANS

    def keys_for(self, kind: MutationKind, post_id: str | None = None) -> list[str]:
        """Return the exact keys (not namespaces) the mutation purges."""
        plan = self.plans[kind]
        keys = [build() for build in plan.static_keys]
        if post_id is not None:
            keys.extend(build(post_id) for build in plan.post_keys)
        elif plan.post_keys:
            logger.warning("Invalidation %s without post_id; per-post keys skipped", kind.value)
        return keys

    async def invalidate(self, kind: MutationKind, post_id: str | None = None) -> None:
        """Purge every cache entry that kind makes stale. Errors are logged and swallowed."""
        if self.cache is None:
            return
        try:
            keys = self.keys_for(kind, post_id)
            for namespace in self.plans[kind].namespaces:
                keys.extend(await self.cache.keys_in_namespace(namespace))
            removed = await self.cache.delete_many(keys) if keys else 0
            logger.info(
                "Cache INVALIDATE: %s post=%s (%s keys)", kind.value, post_id, removed
            )
        except Exception:
            logger.warning(
                "Cache invalidation failed for %s post=%s", kind.value, post_id,
                exc_info=True,
            )
