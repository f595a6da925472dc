"""Comment repository. Interface methods return CommentResult with a minimal author projection."""

from sqlalchemy import ColumnElement, Select, literal_column, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import contains_eager

from blog.application.dtos.comment import CommentResult
from blog.application.dtos.post import AuthorSummary
from blog.domain.exceptions import ResourceNotFoundException
from blog.infrastructure.persistence.models.comment import Comment
from blog.infrastructure.persistence.models.user import User
from blog.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_guard,
)
from blog.shared.utils.datetime import ensure_utc


def _comment_to_result(comment: Comment, author: User | None = None) -> CommentResult:
    author = author if author is not None else comment.author
    return CommentResult(
        id=comment.id,
        post_id=comment.post_id,
        content=comment.content,
        created_at=ensure_utc(comment.created_at),
        updated_at=ensure_utc(comment.updated_at),
        author=AuthorSummary(
            id=author.id, first_name=author.first_name, last_name=author.last_name
        ),
    )


class CommentRepository(BaseRepository[Comment]):
    """Comment storage, ordered oldest first within a post."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Comment)

    def _insertion_order(self) -> ColumnElement:
        if self.db.get_bind().dialect.name == "sqlite":
            return literal_column("comment.rowid")
        return Comment.seq

    def _with_author(self) -> Select[tuple[Comment]]:
        return select(Comment).join(Comment.author).options(contains_eager(Comment.author))

    async def _load(self, comment_id: str) -> Comment | None:
        result = await self.db.execute(self._with_author().where(Comment.id == comment_id))
        return result.scalar_one_or_none()

    @storage_guard("get comment")
    async def get_by_id(self, comment_id: str) -> CommentResult | None:
        comment = await self._load(comment_id)
        return _comment_to_result(comment) if comment else None

    @storage_guard("list comments")
    async def list_by_post(self, post_id: str) -> list[CommentResult]:
        stmt = (
            self._with_author()
            .where(Comment.post_id == post_id)
            .order_by(Comment.created_at.asc(), self._insertion_order().asc())
        )
        result = await self.db.execute(stmt)
        return [_comment_to_result(c) for c in result.scalars().all()]

    @storage_guard("create comment")
    async def create_comment(self, post_id: str, user_id: str, content: str) -> CommentResult:
        author = await self.db.get(User, user_id)
        if author is None:
            raise ResourceNotFoundException("user", user_id)
        comment = Comment(post_id=post_id, user_id=user_id, content=content)
        self.db.add(comment)
        try:
            await self.db.flush()
        except IntegrityError as e:
            # Post removed between the existence check and the insert.
            await self.db.rollback()
            raise ResourceNotFoundException("post", post_id) from e
        return _comment_to_result(comment, author)

    @storage_guard("update comment")
    async def update_content(self, comment_id: str, content: str) -> CommentResult | None:
        comment = await self._load(comment_id)
        if comment is None:
            return None
        comment.content = content
        await self.db.flush()
        return _comment_to_result(comment)

    @storage_guard("delete comment")
    async def delete_comment(self, comment_id: str) -> CommentResult | None:
        comment = await self._load(comment_id)
        if comment is None:
            return None
        deleted = _comment_to_result(comment)
        await self.db.delete(comment)
        await self.db.flush()
        return deleted
