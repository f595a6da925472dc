"""Like relation repository: compare-and-set insert and delete on (user, post)."""

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.exceptions import ResourceNotFoundException
from blog.infrastructure.persistence.models.post_like import PostLike
from blog.infrastructure.persistence.repositories.base import (
    BaseRepository,
    storage_guard,
)

_UPSERT_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


class LikeRepository(BaseRepository[PostLike]):
    """Like storage. The unique (user_id, post_id) constraint decides concurrent toggles."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PostLike)

    @storage_guard("check like")
    async def exists(self, user_id: str, post_id: str) -> bool:
        result = await self.db.execute(
            select(PostLike.id).where(
                PostLike.user_id == user_id, PostLike.post_id == post_id
            )
        )
        return result.scalar_one_or_none() is not None

    @storage_guard("insert like")
    async def insert_if_absent(self, user_id: str, post_id: str) -> bool:
        """Insert the relation; False when a row for the pair already exists.

        Raises ResourceNotFoundException when the post is gone by insert time.
        """
        insert = _UPSERT_INSERTS.get(self.db.get_bind().dialect.name)
        if insert is None:
            try:
                async with self.db.begin_nested():
                    self.db.add(PostLike(user_id=user_id, post_id=post_id))
            except IntegrityError as e:
                if await self.exists(user_id, post_id):
                    return False
                raise ResourceNotFoundException("post", post_id) from e
            return True
        stmt = (
            insert(PostLike)
            .values(user_id=user_id, post_id=post_id)
            .on_conflict_do_nothing(index_elements=["user_id", "post_id"])
        )
        try:
            result = await self.db.execute(stmt)
        except IntegrityError as e:
            # Conflicts are absorbed above; this is the post foreign key.
            await self.db.rollback()
            raise ResourceNotFoundException("post", post_id) from e
        return result.rowcount == 1

    @storage_guard("remove like")
    async def remove(self, user_id: str, post_id: str) -> bool:
        """Delete the relation; False when no row was there to delete."""
        result = await self.db.execute(
            delete(PostLike).where(
                PostLike.user_id == user_id, PostLike.post_id == post_id
            )
        )
        return result.rowcount == 1
