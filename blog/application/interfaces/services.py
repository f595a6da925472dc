"""Service interfaces (ports) for the application layer.

Protocols define contracts for the read cache, the invalidation
coordinator and the security helpers (DIP).
"""

from __future__ import annotations

from typing import Any, Protocol

from blog.domain.enums import MutationKind


class ICacheStore(Protocol):
    """Key/value read cache with per-entry TTL."""

    async def get(self, key: str) -> Any | None:
        """Return cached value or None (never an expired entry)."""

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:
        """Store value; ttl None means the store's default TTL."""

    async def delete(self, key: str) -> int:
        """Remove key; return 0 or 1."""

    async def delete_many(self, keys: list[str]) -> int:
        """Remove keys; return count removed."""

    async def keys(self) -> list[str]:
        """Return all live keys."""

    async def keys_in_namespace(self, namespace: str) -> list[str]:
        """Return live keys whose namespace prefix is namespace."""


class ICacheInvalidator(Protocol):
    """Purges cached reads made stale by a mutation. Never raises."""

    async def invalidate(self, kind: MutationKind, post_id: str | None = None) -> None:
        """Purge every cache entry the mutation kind affects."""


class IPasswordHasher(Protocol):
    """Password hashing (identity collaborator)."""

    def hash_password(self, password: str) -> str:
        """Return a salted hash."""

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Return True if plain_password matches."""


class ITokenIssuer(Protocol):
    """Access token issuance (identity collaborator)."""

    def create_access_token(self, data: dict[str, Any]) -> str:
        """Return a signed token carrying data."""
