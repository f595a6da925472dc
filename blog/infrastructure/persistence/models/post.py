"""Post ORM model. Owns its comments and like relations (deleted with the post)."""

from typing import TYPE_CHECKING

from sqlalchemy import JSON, Boolean, ForeignKey, Integer, String, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from blog.infrastructure.persistence.database import Base
from blog.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin

if TYPE_CHECKING:
    from blog.infrastructure.persistence.models.user import User


class Post(CuidMixin, TimestampMixin, Base):
    """Blog post. views/likes are counters only ever changed by atomic UPDATEs."""

    __tablename__ = "post"

    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=text("false")
    )
    author_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    views: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )
    likes: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default=text("0")
    )

    author: Mapped["User"] = relationship(lazy="raise")
