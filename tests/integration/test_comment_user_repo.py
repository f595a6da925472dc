"""Comment and user repositories against SQLite: ordering, conflicts, cascades."""

import pytest

from blog.domain.enums import UserRole
from blog.domain.exceptions import ConflictException, ResourceNotFoundException
from blog.infrastructure.persistence.repositories import (
    CommentRepository,
    LikeRepository,
    PostRepository,
    UserRepository,
)


async def test_comments_are_oldest_first_with_insertion_tie_break(
    db_session, make_user, make_post, make_comment
) -> None:
    author = await make_user("Ada", "Lovelace")
    post_id = await make_post(author)
    await make_comment(post_id, author, "third", minutes=5)
    await make_comment(post_id, author, "first", minutes=1, comment_id="c-b")
    await make_comment(post_id, author, "second", minutes=1, comment_id="c-a")

    thread = await CommentRepository(db_session).list_by_post(post_id)

    assert [c.content for c in thread] == ["first", "second", "third"]
    assert thread[0].author.last_name == "Lovelace"


async def test_create_comment_on_missing_post(db_session, make_user) -> None:
    author = await make_user("Ada", "Lovelace")
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await CommentRepository(db_session).create_comment("missing", author, "hi")
    assert exc_info.value.details["resource_type"] == "post"


async def test_update_and_delete_comment(db_session, make_user, make_post, make_comment) -> None:
    author = await make_user("Ada", "Lovelace")
    post_id = await make_post(author)
    comment_id = await make_comment(post_id, author, "before")
    repo = CommentRepository(db_session)

    updated = await repo.update_content(comment_id, "after")
    await repo.commit()
    assert updated.content == "after"

    deleted = await repo.delete_comment(comment_id)
    await repo.commit()
    assert deleted.post_id == post_id
    assert await repo.get_by_id(comment_id) is None
    assert await repo.update_content(comment_id, "x") is None


async def test_duplicate_email_is_a_conflict(db_session, make_user) -> None:
    await make_user("Ada", "Lovelace")
    repo = UserRepository(db_session)
    with pytest.raises(ConflictException):
        await repo.create_user("Other", "Person", "ADA.LOVELACE@example.com", "h", UserRole.USER)


async def test_duplicate_full_name_is_a_conflict(db_session, make_user) -> None:
    await make_user("Ada", "Lovelace")
    repo = UserRepository(db_session)
    with pytest.raises(ConflictException):
        await repo.create_user("Ada", "Lovelace", "someone@example.com", "h", UserRole.USER)


async def test_login_lookup_ignores_email_case(db_session, make_user) -> None:
    user_id = await make_user("Ada", "Lovelace")
    creds = await UserRepository(db_session).get_credentials_by_email("ADA.Lovelace@Example.com")
    assert creds.user.id == user_id
    assert creds.hashed_password == "not-a-hash"


async def test_list_and_count_users_search(db_session, make_user) -> None:
    await make_user("Ada", "Lovelace")
    await make_user("Grace", "Hopper")
    repo = UserRepository(db_session)
    assert await repo.count_users(None) == 2
    found = await repo.list_users("hop", 0, 10)
    assert [u.first_name for u in found] == ["Grace"]
    assert await repo.count_users("example.com") == 2


async def test_delete_user_cascades_and_keeps_counters_consistent(
    db_session, make_user, make_post, make_comment
) -> None:
    leaving = await make_user("Leaving", "User")
    staying = await make_user("Staying", "User")
    their_post = await make_post(leaving, "theirs")
    other_post = await make_post(staying, "other")
    await make_comment(other_post, leaving, "by leaving")
    await make_comment(their_post, staying, "on their post")
    likes = LikeRepository(db_session)
    posts = PostRepository(db_session)
    for user, post in ((leaving, other_post), (staying, their_post)):
        await likes.insert_if_absent(user, post)
        await posts.increment_likes(post)
    await posts.commit()

    users = UserRepository(db_session)
    deleted = await users.delete_user(leaving)
    await users.commit()

    assert deleted.id == leaving
    assert await users.get_by_id(leaving) is None
    assert await posts.exists(their_post) is False
    assert await posts.get_likes(other_post) == 0
    assert await likes.exists(leaving, other_post) is False
    assert await CommentRepository(db_session).list_by_post(other_post) == []
    assert await users.delete_user(leaving) is None
