"""Like relation. The row existing is the 'liked' state for (user, post)."""

from sqlalchemy import ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from blog.infrastructure.persistence.database import Base
from blog.infrastructure.persistence.models.mixins import CreatedAtMixin, CuidMixin


class PostLike(CuidMixin, CreatedAtMixin, Base):
    """Unique (user_id, post_id): the storage-level guard for the like counter."""

    __tablename__ = "post_like"

    user_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )
    post_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("user_id", "post_id", name="uq_post_like_user_post"),
    )
