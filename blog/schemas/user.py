"""User API schemas."""

from pydantic import EmailStr, Field

from blog.domain.enums import UserRole
from blog.schemas.common import APIModel


class UserResponse(APIModel):
    """User (no password)."""

    id: str
    first_name: str
    last_name: str
    email: EmailStr
    role: UserRole


class UserListResponse(APIModel):
    items: list[UserResponse]
    total: int
    page: int
    limit: int


class UserNameUpdateRequest(APIModel):
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class PasswordChangeRequest(APIModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=128)
