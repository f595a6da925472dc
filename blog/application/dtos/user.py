"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass, field

from blog.domain.enums import UserRole


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as supplied by the identity collaborator."""

    id: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


@dataclass(frozen=True)
class UserResult:
    """User read-model. No password."""

    id: str
    first_name: str
    last_name: str
    email: str
    role: UserRole


@dataclass(frozen=True)
class UserCredentials:
    """User plus stored password hash (authentication path only)."""

    user: UserResult
    hashed_password: str


@dataclass(frozen=True)
class AuthResult:
    """Issued access token and the user it was issued for."""

    access_token: str
    user: UserResult


@dataclass(frozen=True)
class UserPage:
    """One page of users for the admin list."""

    items: list[UserResult] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10
