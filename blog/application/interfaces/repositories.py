"""Repository interfaces (ports) for the application layer.

Protocols define the storage collaborator contracts that infrastructure
implementations must fulfill (DIP). Every write either fully succeeds or
fully fails; connectivity problems surface as StorageFailureException.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from blog.application.dtos.comment import CommentResult
    from blog.application.dtos.post import PostCreate, PostListQuery, PostResult
    from blog.application.dtos.user import UserCredentials, UserResult
    from blog.domain.enums import UserRole


class IPostRepository(Protocol):
    """Protocol for post storage."""

    async def commit(self) -> None:
        """Commit the current unit of work."""

    async def get_by_id(self, post_id: str) -> PostResult | None:
        """Return post with author projection, or None."""

    async def find_posts(self, query: PostListQuery) -> list[PostResult]:
        """Return one page of posts matching query (filtered, ordered, sliced)."""

    async def count_posts(self, query: PostListQuery) -> int:
        """Return the number of posts matching query filters (ignores paging)."""

    async def list_all(self) -> list[PostResult]:
        """Return every post, newest first."""

    async def create_post(self, author_id: str, data: PostCreate) -> PostResult:
        """Insert a post and return it."""

    async def update_post(self, post_id: str, changes: dict[str, Any]) -> PostResult | None:
        """Apply partial changes; None when the post does not exist."""

    async def delete_post(self, post_id: str) -> PostResult | None:
        """Delete post with its comments and likes; return the deleted post or None."""

    async def delete_posts(self, post_ids: list[str] | None) -> int:
        """Delete the given posts (all posts when None); return count removed."""

    async def exists(self, post_id: str) -> bool:
        """Return True if the post exists."""

    async def increment_views(self, post_id: str) -> bool:
        """Atomically add one view; False when the post does not exist."""

    async def increment_likes(self, post_id: str) -> None:
        """Atomically add one like."""

    async def decrement_likes(self, post_id: str) -> None:
        """Atomically remove one like, never below zero."""

    async def get_likes(self, post_id: str) -> int | None:
        """Return the current like counter, or None for a missing post."""


class ILikeRepository(Protocol):
    """Protocol for (user, post) like relations. Unique on the pair."""

    async def exists(self, user_id: str, post_id: str) -> bool:
        """Return True if the user likes the post."""

    async def insert_if_absent(self, user_id: str, post_id: str) -> bool:
        """Insert the relation; False when it already existed (lost race)."""

    async def remove(self, user_id: str, post_id: str) -> bool:
        """Delete the relation; False when it was already gone."""


class ICommentRepository(Protocol):
    """Protocol for comment storage."""

    async def commit(self) -> None:
        """Commit the current unit of work."""

    async def get_by_id(self, comment_id: str) -> CommentResult | None:
        """Return comment with author projection, or None."""

    async def list_by_post(self, post_id: str) -> list[CommentResult]:
        """Return comments for post, oldest first."""

    async def create_comment(self, post_id: str, user_id: str, content: str) -> CommentResult:
        """Insert a comment and return it."""

    async def update_content(self, comment_id: str, content: str) -> CommentResult | None:
        """Replace content; None when the comment does not exist."""

    async def delete_comment(self, comment_id: str) -> CommentResult | None:
        """Delete and return the removed comment, or None."""


class IUserRepository(Protocol):
    """Protocol for user storage."""

    async def commit(self) -> None:
        """Commit the current unit of work."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        """Return user and password hash by email (authentication only)."""

    async def get_credentials_by_id(self, user_id: str) -> UserCredentials | None:
        """Return user and password hash by ID (password change only)."""

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        hashed_password: str,
        role: UserRole,
    ) -> UserResult:
        """Insert a user; ConflictException on duplicate email or name pair."""

    async def update_name(self, user_id: str, first_name: str, last_name: str) -> UserResult | None:
        """Change display name; ConflictException on duplicate name pair."""

    async def update_password(self, user_id: str, hashed_password: str) -> bool:
        """Store a new password hash; False when the user does not exist."""

    async def delete_user(self, user_id: str) -> UserResult | None:
        """Delete user and everything they own; return the removed user or None."""

    async def list_users(self, search: str | None, skip: int, limit: int) -> list[UserResult]:
        """Return one page of users (optionally filtered by name/email substring)."""

    async def count_users(self, search: str | None) -> int:
        """Return the number of users matching search."""
