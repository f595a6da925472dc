"""EngagementService: like toggle compare-and-set paths and view counting."""

from unittest.mock import AsyncMock

import pytest

from blog.application.use_cases.engagement import EngagementService
from blog.domain.enums import MutationKind
from blog.domain.exceptions import ResourceNotFoundException


@pytest.fixture
def engagement():
    post_repo = AsyncMock()
    post_repo.exists.return_value = True
    post_repo.increment_views.return_value = True
    like_repo = AsyncMock()
    invalidator = AsyncMock()
    service = EngagementService(post_repo, like_repo, invalidator)
    return service, post_repo, like_repo, invalidator


async def test_like_inserts_and_increments(engagement) -> None:
    service, post_repo, like_repo, invalidator = engagement
    like_repo.exists.return_value = False
    like_repo.insert_if_absent.return_value = True
    post_repo.get_likes.return_value = 1

    result = await service.toggle_like("p1", "u1")

    assert (result.liked, result.likes) == (True, 1)
    post_repo.increment_likes.assert_awaited_once_with("p1")
    post_repo.decrement_likes.assert_not_awaited()
    post_repo.commit.assert_awaited_once()
    invalidator.invalidate.assert_awaited_once_with(MutationKind.LIKE_TOGGLED, "p1")


async def test_unlike_removes_and_decrements(engagement) -> None:
    service, post_repo, like_repo, _ = engagement
    like_repo.exists.return_value = True
    like_repo.remove.return_value = True
    post_repo.get_likes.return_value = 0

    result = await service.toggle_like("p1", "u1")

    assert (result.liked, result.likes) == (False, 0)
    post_repo.decrement_likes.assert_awaited_once_with("p1")
    post_repo.increment_likes.assert_not_awaited()


async def test_lost_insert_race_leaves_counter_alone(engagement) -> None:
    """A concurrent toggle already inserted the relation: report liked, no second increment."""
    service, post_repo, like_repo, _ = engagement
    like_repo.exists.return_value = False
    like_repo.insert_if_absent.return_value = False
    post_repo.get_likes.return_value = 1

    result = await service.toggle_like("p1", "u1")

    assert (result.liked, result.likes) == (True, 1)
    post_repo.increment_likes.assert_not_awaited()


async def test_lost_delete_race_leaves_counter_alone(engagement) -> None:
    service, post_repo, like_repo, _ = engagement
    like_repo.exists.return_value = True
    like_repo.remove.return_value = False
    post_repo.get_likes.return_value = 0

    result = await service.toggle_like("p1", "u1")

    assert (result.liked, result.likes) == (False, 0)
    post_repo.decrement_likes.assert_not_awaited()


async def test_like_missing_post(engagement) -> None:
    service, post_repo, like_repo, invalidator = engagement
    post_repo.exists.return_value = False
    with pytest.raises(ResourceNotFoundException):
        await service.toggle_like("nope", "u1")
    like_repo.exists.assert_not_awaited()
    invalidator.invalidate.assert_not_awaited()


async def test_like_on_post_deleted_mid_toggle(engagement) -> None:
    service, post_repo, like_repo, _ = engagement
    like_repo.exists.return_value = False
    like_repo.insert_if_absent.return_value = True
    post_repo.get_likes.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await service.toggle_like("p1", "u1")


async def test_has_liked(engagement) -> None:
    service, _, like_repo, _ = engagement
    like_repo.exists.return_value = True
    assert await service.has_liked("p1", "u1") is True
    like_repo.exists.assert_awaited_once_with("u1", "p1")


async def test_register_view_counts_every_call(engagement) -> None:
    service, post_repo, _, invalidator = engagement
    for _ in range(3):
        await service.register_view("p1")
    assert post_repo.increment_views.await_count == 3
    assert post_repo.commit.await_count == 3
    invalidator.invalidate.assert_awaited_with(MutationKind.VIEW_REGISTERED, "p1")


async def test_register_view_missing_post(engagement) -> None:
    service, post_repo, _, invalidator = engagement
    post_repo.increment_views.return_value = False
    with pytest.raises(ResourceNotFoundException):
        await service.register_view("nope")
    post_repo.commit.assert_not_awaited()
    invalidator.invalidate.assert_not_awaited()
