"""User ORM model (authors, commenters, admins)."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from blog.domain.enums import UserRole
from blog.infrastructure.persistence.database import Base
from blog.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin


class User(CuidMixin, TimestampMixin, Base):
    """User model. Table: app_user. Unique email and unique (first_name, last_name)."""

    __tablename__ = "app_user"

    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(
        String(16), nullable=False, default=UserRole.USER.value
    )

    __table_args__ = (
        UniqueConstraint("first_name", "last_name", name="uq_user_full_name"),
    )
