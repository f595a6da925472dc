"""User repository. Interface methods return application DTOs; hashes only via UserCredentials."""

from sqlalchemy import Select, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from blog.application.dtos.user import UserCredentials, UserResult
from blog.domain.enums import UserRole
from blog.infrastructure.persistence.models.comment import Comment
from blog.infrastructure.persistence.models.post import Post
from blog.infrastructure.persistence.models.post_like import PostLike
from blog.infrastructure.persistence.models.user import User
from blog.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_guard,
)
from blog.infrastructure.persistence.repositories.post_repo import escape_like

_DUPLICATE_USER = "A user with this email or name already exists"


def _user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(
        id=u.id,
        first_name=u.first_name,
        last_name=u.last_name,
        email=u.email,
        role=UserRole(u.role),
    )


def _user_to_credentials(u: User) -> UserCredentials:
    return UserCredentials(user=_user_to_result(u), hashed_password=u.hashed_password)


class UserRepository(BaseRepository[User]):
    """User repository. create_user, update_name, update_password, delete_user, admin list."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    @staticmethod
    def _apply_search(stmt: Select, search: str | None) -> Select:
        if not search:
            return stmt
        pattern = f"%{escape_like(search)}%"
        return stmt.where(
            or_(
                User.first_name.ilike(pattern, escape="\\"),
                User.last_name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
            )
        )

    @storage_guard("get user")
    async def get_by_id(self, user_id: str) -> UserResult | None:
        user = await self.get_model(user_id)
        return _user_to_result(user) if user else None

    @storage_guard("get user credentials")
    async def get_credentials_by_email(self, email: str) -> UserCredentials | None:
        result = await self.db.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        user = result.scalar_one_or_none()
        return _user_to_credentials(user) if user else None

    @storage_guard("get user credentials")
    async def get_credentials_by_id(self, user_id: str) -> UserCredentials | None:
        user = await self.get_model(user_id)
        return _user_to_credentials(user) if user else None

    @storage_guard("create user")
    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        hashed_password: str,
        role: UserRole,
    ) -> UserResult:
        user = User(
            first_name=first_name,
            last_name=last_name,
            email=email.lower(),
            hashed_password=hashed_password,
            role=role.value,
        )
        self.db.add(user)
        await self.flush_or_conflict(_DUPLICATE_USER, "user")
        return _user_to_result(user)

    @storage_guard("update user")
    async def update_name(
        self, user_id: str, first_name: str, last_name: str
    ) -> UserResult | None:
        user = await self.get_model(user_id)
        if user is None:
            return None
        user.first_name = first_name
        user.last_name = last_name
        await self.flush_or_conflict(_DUPLICATE_USER, "user")
        return _user_to_result(user)

    @storage_guard("update password")
    async def update_password(self, user_id: str, hashed_password: str) -> bool:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(hashed_password=hashed_password)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @storage_guard("delete user")
    async def delete_user(self, user_id: str) -> UserResult | None:
        """Delete the user with their posts, comments and likes.

        Like counters on other authors' posts are decremented for each like
        the user held, so counters keep matching the relation rows.
        """
        user = await self.get_model(user_id)
        if user is None:
            return None
        deleted = _user_to_result(user)
        own_posts = select(Post.id).where(Post.author_id == user_id)
        liked_posts = select(PostLike.post_id).where(PostLike.user_id == user_id)
        await self.db.execute(
            update(Post)
            .where(Post.id.in_(liked_posts), Post.likes > 0)
            .values(likes=Post.likes - 1, updated_at=Post.updated_at)
            .execution_options(synchronize_session=False)
        )
        await self.db.execute(
            delete(PostLike).where(
                or_(PostLike.user_id == user_id, PostLike.post_id.in_(own_posts))
            )
        )
        await self.db.execute(
            delete(Comment).where(
                or_(Comment.user_id == user_id, Comment.post_id.in_(own_posts))
            )
        )
        await self.db.execute(delete(Post).where(Post.author_id == user_id))
        await self.db.delete(user)
        await self.db.flush()
        return deleted

    @storage_guard("list users")
    async def list_users(self, search: str | None, skip: int, limit: int) -> list[UserResult]:
        stmt = self._apply_search(select(User), search)
        stmt = stmt.order_by(User.created_at.desc(), User.id.asc()).offset(skip).limit(limit)
        result = await self.db.execute(stmt)
        return [_user_to_result(u) for u in result.scalars().all()]

    @storage_guard("count users")
    async def count_users(self, search: str | None) -> int:
        stmt = self._apply_search(select(func.count()).select_from(User), search)
        result = await self.db.execute(stmt)
        return result.scalar_one()
