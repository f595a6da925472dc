"""User application service: signup, login, profile changes, admin user management."""

from __future__ import annotations

import asyncio
import hmac
import logging
from typing import Any, Protocol

from blog.application.dtos.user import AuthResult, UserPage, UserResult
from blog.application.interfaces.repositories import IUserRepository
from blog.application.interfaces.services import (
    ICacheInvalidator,
    ICacheStore,
    IPasswordHasher,
    ITokenIssuer,
)
from blog.application.services.cache_keys import admin_users_list_key
from blog.application.services.payloads import user_page_from_cached, user_page_to_dict
from blog.application.services.read_through import ReadThroughCache
from blog.application.use_cases.posts.post_query import parse_positive_int
from blog.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from blog.domain.enums import MutationKind, UserRole
from blog.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Invalid email or password"


class AuthSecurityPort(IPasswordHasher, ITokenIssuer, Protocol):
    """Password hashing plus token issuance, as provided by the composition root."""


def _require_name(value: Any, field: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationException(f"{field} is required", field=field)
    return value.strip()


class UserService:
    """Users and their credentials. Every mutation invalidates the admin user listing."""

    def __init__(
        self,
        user_repo: IUserRepository,
        auth_security: AuthSecurityPort,
        invalidator: ICacheInvalidator,
        cache: ICacheStore | None = None,
        cache_ttl: int | None = None,
        admin_invite_code: str | None = None,
        max_page_limit: int = 100,
    ) -> None:
        self._user_repo = user_repo
        self._auth_security = auth_security
        self._invalidator = invalidator
        self._cache = ReadThroughCache(cache, ttl=cache_ttl)
        self._admin_invite_code = admin_invite_code
        self._max_page_limit = max_page_limit
        self._dummy_hash: str | None = None

    async def _get_dummy_hash(self) -> str:
        """Valid hash for constant-time comparison when the email is unknown."""
        if self._dummy_hash is None:
            self._dummy_hash = await asyncio.to_thread(
                self._auth_security.hash_password, "not-a-real-password"
            )
        return self._dummy_hash

    def _role_for(self, invite_code: str | None) -> UserRole:
        if invite_code and self._admin_invite_code and hmac.compare_digest(
            invite_code.encode("utf-8"), self._admin_invite_code.encode("utf-8")
        ):
            return UserRole.ADMIN
        return UserRole.USER

    def _issue(self, user: UserResult) -> AuthResult:
        token = self._auth_security.create_access_token(
            {"sub": user.id, "role": user.role.value}
        )
        return AuthResult(access_token=token, user=user)

    async def signup(
        self,
        first_name: str,
        last_name: str,
        email: str,
        password: str,
        invite_code: str | None = None,
    ) -> AuthResult:
        """Create a user (ADMIN when invite_code matches) and return an access token."""
        first = _require_name(first_name, "first_name")
        last = _require_name(last_name, "last_name")
        if not password:
            raise ValidationException("password is required", field="password")
        hashed = await asyncio.to_thread(self._auth_security.hash_password, password)
        user = await self._user_repo.create_user(
            first_name=first,
            last_name=last,
            email=email,
            hashed_password=hashed,
            role=self._role_for(invite_code),
        )
        await self._user_repo.commit()
        await self._invalidator.invalidate(MutationKind.USER_CREATED)
        logger.info("User created: %s (%s)", user.id, user.role.value)
        return self._issue(user)

    async def login(self, email: str, password: str) -> AuthResult:
        creds = await self._user_repo.get_credentials_by_email(email)
        if creds is None:
            dummy_hash = await self._get_dummy_hash()
            await asyncio.to_thread(self._auth_security.verify_password, password, dummy_hash)
            raise AuthenticationException(_INVALID_CREDENTIALS)
        if not await asyncio.to_thread(
            self._auth_security.verify_password, password, creds.hashed_password
        ):
            raise AuthenticationException(_INVALID_CREDENTIALS)
        return self._issue(creds.user)

    async def admin_login(self, email: str, password: str) -> AuthResult:
        """Login that only succeeds for ADMIN users."""
        result = await self.login(email, password)
        if result.user.role != UserRole.ADMIN:
            raise AuthorizationException(message="Admin access required")
        return result

    async def get_user(self, user_id: str) -> UserResult:
        user = await self._user_repo.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    async def update_name(self, user_id: str, first_name: str, last_name: str) -> UserResult:
        user = await self._user_repo.update_name(
            user_id,
            _require_name(first_name, "first_name"),
            _require_name(last_name, "last_name"),
        )
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        await self._user_repo.commit()
        await self._invalidator.invalidate(MutationKind.USER_UPDATED)
        return user

    async def change_password(
        self, user_id: str, current_password: str, new_password: str
    ) -> None:
        """Replace the password after verifying the current one."""
        if not new_password:
            raise ValidationException("new password is required", field="new_password")
        creds = await self._user_repo.get_credentials_by_id(user_id)
        if creds is None:
            raise ResourceNotFoundException("user", user_id)
        if not await asyncio.to_thread(
            self._auth_security.verify_password, current_password, creds.hashed_password
        ):
            raise AuthenticationException("Current password is incorrect")
        hashed = await asyncio.to_thread(self._auth_security.hash_password, new_password)
        await self._user_repo.update_password(user_id, hashed)
        await self._user_repo.commit()
        await self._invalidator.invalidate(MutationKind.USER_PASSWORD_CHANGED)

    async def delete_user(self, user_id: str) -> UserResult:
        """Delete a user with their posts, comments and likes."""
        user = await self._user_repo.delete_user(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        await self._user_repo.commit()
        await self._invalidator.invalidate(MutationKind.USER_DELETED)
        logger.info("User deleted: %s", user_id)
        return user

    async def list_users(
        self, search: str | None = None, page: Any = None, limit: Any = None
    ) -> UserPage:
        """Paginated admin user list, optionally filtered by name or email (cached)."""
        page_num = parse_positive_int(page, "page", DEFAULT_PAGE)
        limit_num = min(
            parse_positive_int(limit, "limit", DEFAULT_PAGE_LIMIT), self._max_page_limit
        )
        term = search.strip() if search else None
        term = term or None

        async def load() -> UserPage:
            total = await self._user_repo.count_users(term)
            items = await self._user_repo.list_users(term, (page_num - 1) * limit_num, limit_num)
            return UserPage(items=items, total=total, page=page_num, limit=limit_num)

        result = await self._cache.fetch(
            admin_users_list_key(term, page_num, limit_num),
            load,
            user_page_to_dict,
            user_page_from_cached,
        )
        return result if result is not None else UserPage(page=page_num, limit=limit_num)
