"""InvalidationCoordinator: each mutation purges exactly the entries it makes stale."""

import logging
from unittest.mock import AsyncMock

import pytest

from blog.application.services.cache_keys import (
    admin_users_list_key,
    all_posts_key,
    post_comments_key,
    post_detail_key,
    post_list_key,
)
from blog.application.services.invalidation import InvalidationCoordinator
from blog.domain.enums import MutationKind, PostSortField
from blog.infrastructure.cache import CacheStore

LIST_A = post_list_key()
LIST_B = post_list_key(search="rust", sort_field=PostSortField.TITLE, page=3)
ALL = all_posts_key()
DETAIL_P1 = post_detail_key("p1")
DETAIL_P2 = post_detail_key("p2")
COMMENTS_P1 = post_comments_key("p1")
COMMENTS_P2 = post_comments_key("p2")
USERS = admin_users_list_key()
EVERY_KEY = {LIST_A, LIST_B, ALL, DETAIL_P1, DETAIL_P2, COMMENTS_P1, COMMENTS_P2, USERS}


@pytest.fixture
async def warm_cache(cache: CacheStore) -> CacheStore:
    for key in EVERY_KEY:
        await cache.set(key, {"cached": key})
    return cache


async def _remaining(cache: CacheStore) -> set[str]:
    return set(await cache.keys())


@pytest.mark.parametrize(
    ("kind", "purged"),
    [
        (MutationKind.POST_CREATED, {LIST_A, LIST_B, ALL}),
        (MutationKind.POST_UPDATED, {LIST_A, LIST_B, ALL, DETAIL_P1}),
        (MutationKind.POST_DELETED, {LIST_A, LIST_B, ALL, DETAIL_P1, COMMENTS_P1}),
        (MutationKind.COMMENT_CREATED, {COMMENTS_P1, DETAIL_P1}),
        (MutationKind.COMMENT_UPDATED, {COMMENTS_P1, DETAIL_P1}),
        (MutationKind.COMMENT_DELETED, {COMMENTS_P1, DETAIL_P1}),
        (MutationKind.VIEW_REGISTERED, {DETAIL_P1}),
        (MutationKind.LIKE_TOGGLED, {DETAIL_P1}),
        (MutationKind.USER_CREATED, {USERS}),
        (MutationKind.USER_PASSWORD_CHANGED, {USERS}),
    ],
)
async def test_mutation_purges_exactly_its_entries(
    warm_cache: CacheStore, kind: MutationKind, purged: set[str]
) -> None:
    await InvalidationCoordinator(warm_cache).invalidate(kind, "p1")
    assert await _remaining(warm_cache) == EVERY_KEY - purged


async def test_engagement_leaves_listings_cached(warm_cache: CacheStore) -> None:
    """Views and likes must not purge listings (bounded staleness until TTL)."""
    coordinator = InvalidationCoordinator(warm_cache)
    await coordinator.invalidate(MutationKind.VIEW_REGISTERED, "p1")
    await coordinator.invalidate(MutationKind.LIKE_TOGGLED, "p1")
    remaining = await _remaining(warm_cache)
    assert {LIST_A, LIST_B, ALL} <= remaining


async def test_bulk_delete_purges_every_post_entry_once(warm_cache: CacheStore) -> None:
    await InvalidationCoordinator(warm_cache).invalidate(MutationKind.POSTS_BULK_DELETED)
    assert await _remaining(warm_cache) == {USERS}


@pytest.mark.parametrize("kind", [MutationKind.USER_UPDATED, MutationKind.USER_DELETED])
async def test_author_changes_purge_embedded_projections(
    warm_cache: CacheStore, kind: MutationKind
) -> None:
    await InvalidationCoordinator(warm_cache).invalidate(kind)
    assert await _remaining(warm_cache) == set()


def test_keys_for_lists_exact_keys() -> None:
    coordinator = InvalidationCoordinator(None)
    assert coordinator.keys_for(MutationKind.POST_DELETED, "p1") == [
        ALL,
        DETAIL_P1,
        COMMENTS_P1,
    ]
    assert coordinator.keys_for(MutationKind.LIKE_TOGGLED, "p1") == [DETAIL_P1]


async def test_without_cache_is_a_no_op() -> None:
    await InvalidationCoordinator(None).invalidate(MutationKind.POST_CREATED, "p1")


async def test_cache_failure_is_logged_and_swallowed(caplog) -> None:
    broken = AsyncMock()
    broken.keys_in_namespace.side_effect = ConnectionError("cache down")
    with caplog.at_level(logging.WARNING):
        await InvalidationCoordinator(broken).invalidate(MutationKind.POST_UPDATED, "p1")
    assert "Cache invalidation failed" in caplog.text


async def test_delete_failure_is_swallowed() -> None:
    broken = AsyncMock()
    broken.keys_in_namespace.return_value = []
    broken.delete_many.side_effect = RuntimeError("boom")
    await InvalidationCoordinator(broken).invalidate(MutationKind.LIKE_TOGGLED, "p1")
    broken.delete_many.assert_awaited_once_with([DETAIL_P1])
