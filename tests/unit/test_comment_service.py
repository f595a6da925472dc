"""CommentService unit tests with mocked repositories."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

from blog.application.dtos.comment import CommentResult
from blog.application.dtos.post import AuthorSummary
from blog.application.use_cases.comments import CommentService
from blog.application.use_cases.comments.comment_operations import normalize_content
from blog.domain.enums import MutationKind
from blog.domain.exceptions import ResourceNotFoundException, ValidationException
from blog.infrastructure.cache import CacheStore

NOW = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def _comment(comment_id: str = "c1", content: str = "Nice post") -> CommentResult:
    return CommentResult(
        id=comment_id,
        post_id="p1",
        content=content,
        created_at=NOW,
        updated_at=NOW,
        author=AuthorSummary(id="u1", first_name="Grace", last_name="Hopper"),
    )


@pytest.fixture
def comment_mocks():
    comment_repo = AsyncMock()
    post_repo = AsyncMock()
    post_repo.exists.return_value = True
    invalidator = AsyncMock()

    def make(cache: CacheStore | None = None) -> CommentService:
        return CommentService(comment_repo, post_repo, invalidator, cache=cache)

    return make, comment_repo, post_repo, invalidator


@pytest.mark.parametrize("content", ["", "   ", None, 42])
def test_empty_content_is_rejected(content) -> None:
    with pytest.raises(ValidationException) as exc_info:
        normalize_content(content)
    assert exc_info.value.message == "Comment content cannot be empty"


def test_content_is_trimmed_and_bounded() -> None:
    assert normalize_content("  hi  ") == "hi"
    with pytest.raises(ValidationException):
        normalize_content("x" * 5001)


async def test_create(comment_mocks) -> None:
    make, comment_repo, _, invalidator = comment_mocks
    comment_repo.create_comment.return_value = _comment()
    result = await make().create("p1", "u1", " Nice post ")
    assert result.author.first_name == "Grace"
    comment_repo.create_comment.assert_awaited_once_with("p1", "u1", "Nice post")
    comment_repo.commit.assert_awaited_once()
    invalidator.invalidate.assert_awaited_once_with(MutationKind.COMMENT_CREATED, "p1")


async def test_create_on_missing_post(comment_mocks) -> None:
    make, comment_repo, post_repo, _ = comment_mocks
    post_repo.exists.return_value = False
    with pytest.raises(ResourceNotFoundException):
        await make().create("nope", "u1", "hello")
    comment_repo.create_comment.assert_not_awaited()


async def test_empty_comment_never_reaches_storage(comment_mocks) -> None:
    make, comment_repo, post_repo, _ = comment_mocks
    with pytest.raises(ValidationException):
        await make().create("p1", "u1", "  ")
    post_repo.exists.assert_not_awaited()
    comment_repo.create_comment.assert_not_awaited()


async def test_list_by_post_is_cached_and_empty_threads_too(comment_mocks, cache) -> None:
    make, comment_repo, _, _ = comment_mocks
    comment_repo.list_by_post.return_value = []
    service = make(cache)
    assert await service.list_by_post("p1") == []
    assert await service.list_by_post("p1") == []
    comment_repo.list_by_post.assert_awaited_once_with("p1")


async def test_list_round_trips_through_cache(comment_mocks, cache) -> None:
    make, comment_repo, _, _ = comment_mocks
    comment_repo.list_by_post.return_value = [_comment("c1"), _comment("c2")]
    service = make(cache)
    await service.list_by_post("p1")
    cached = await service.list_by_post("p1")
    assert [c.id for c in cached] == ["c1", "c2"]
    assert cached[0].created_at == NOW


async def test_update_invalidates_owning_post(comment_mocks) -> None:
    make, comment_repo, _, invalidator = comment_mocks
    comment_repo.update_content.return_value = _comment(content="edited")
    result = await make().update("c1", "edited")
    assert result.content == "edited"
    invalidator.invalidate.assert_awaited_once_with(MutationKind.COMMENT_UPDATED, "p1")


async def test_update_missing(comment_mocks) -> None:
    make, comment_repo, _, _ = comment_mocks
    comment_repo.update_content.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await make().update("nope", "text")


async def test_delete(comment_mocks) -> None:
    make, comment_repo, _, invalidator = comment_mocks
    comment_repo.delete_comment.return_value = _comment()
    await make().delete("c1")
    invalidator.invalidate.assert_awaited_once_with(MutationKind.COMMENT_DELETED, "p1")


async def test_delete_missing(comment_mocks) -> None:
    make, comment_repo, _, invalidator = comment_mocks
    comment_repo.delete_comment.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await make().delete("nonexistent-id")
    comment_repo.commit.assert_not_awaited()
    invalidator.invalidate.assert_not_awaited()


async def test_get_missing_comment(comment_mocks) -> None:
    make, comment_repo, _, _ = comment_mocks
    comment_repo.get_by_id.return_value = None
    with pytest.raises(ResourceNotFoundException):
        await make().get_comment("nope")
