"""Comment ORM model. Lives within exactly one post's lifetime."""

from typing import TYPE_CHECKING

from sqlalchemy import BigInteger, ForeignKey, Identity, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog.infrastructure.persistence.database import Base
from blog.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

if TYPE_CHECKING:
    from blog.infrastructure.persistence.models.user import User


class Comment(CuidMixin, TimestampMixin, Base):
    """Comment on a post. post_id is a back-reference; the post owns the comment."""

    __tablename__ = "comment"

    post_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Insertion order within equal created_at. Filled by an identity on
    # PostgreSQL; SQLite has no identity columns and orders by rowid instead.
    seq: Mapped[int | None] = mapped_column(BigInteger, Identity(), unique=True)

    author: Mapped["User"] = relationship(lazy="raise")
