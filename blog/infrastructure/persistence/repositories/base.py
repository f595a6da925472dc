"""Base repository: primary-key lookup, unit-of-work commit and storage error translation."""

import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, Generic, ParamSpec, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.domain.exceptions import ConflictException, StorageFailureException
from blog.infrastructure.persistence.database import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")
ModelType = TypeVar("ModelType", bound=Base)


def storage_guard(
    operation: str,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """Translate connectivity/operational driver errors into StorageFailureException.

    Failures are surfaced once; nothing here retries.
    """

    def decorator(fn: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(fn)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await fn(*args, **kwargs)
            except (OperationalError, InterfaceError) as e:
                logger.error("Storage failure during %s: %s", operation, e.orig)
                raise StorageFailureException(operation, str(e.orig)) from e

        return wrapper

    return decorator


class BaseRepository(Generic[ModelType]):
    """Base repository with get_model, commit and flush helpers.

    Subclasses expose DTO-returning methods; ORM instances never leave the
    repository.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_model(self, entity_id: str) -> ModelType | None:
        """Return a single record by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    @storage_guard("commit")
    async def commit(self) -> None:
        """Commit the current unit of work."""
        await self.db.commit()

    async def flush_or_conflict(self, message: str, resource_type: str) -> None:
        """Flush pending changes; a uniqueness violation becomes ConflictException."""
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            raise ConflictException(message, resource_type) from e
