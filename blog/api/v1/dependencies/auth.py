"""Auth dependencies: token/password helpers and the calling principal (composition root)."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from blog.application.dtos.user import Principal
from blog.domain.exceptions import AuthenticationException, AuthorizationException
from blog.infrastructure.persistence.database import get_db
from blog.infrastructure.persistence.repositories import UserRepository
from blog.infrastructure.security.jwt import create_access_token, verify_token
from blog.infrastructure.security.password import get_password_hash, verify_password

_http_bearer = HTTPBearer(auto_error=False)


class AuthSecurity:
    """Token and password hashing provided via DI (no direct infra imports in services)."""

    def create_access_token(self, data: dict) -> str:
        return create_access_token(data)

    def hash_password(self, password: str) -> str:
        return get_password_hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return verify_password(plain_password, hashed_password)


def get_auth_security() -> AuthSecurity:
    """Auth token creation and password hashing (composition root)."""
    return AuthSecurity()


async def get_principal_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> Principal | None:
    """Return the caller from the bearer token if present and the user still exists; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials)
    except ValueError:
        return None
    user = await UserRepository(db).get_by_id(payload["sub"])
    if user is None:
        return None
    # Role comes from storage so demotions apply to tokens already issued.
    return Principal(id=user.id, role=user.role)


async def get_principal(
    principal: Annotated[Principal | None, Depends(get_principal_optional)],
) -> Principal:
    """Return the caller; raise AuthenticationException (401) if missing or invalid."""
    if principal is None:
        raise AuthenticationException("Not authenticated")
    return principal


async def require_admin(
    principal: Annotated[Principal, Depends(get_principal)],
) -> Principal:
    """Return the caller if ADMIN; else AuthorizationException (403)."""
    if not principal.is_admin:
        raise AuthorizationException(message="Admin access required")
    return principal
