"""Auth API schemas (signup, login, token)."""

from pydantic import EmailStr, Field

from blog.schemas.common import APIModel
from blog.schemas.user import UserResponse


class SignupRequest(APIModel):
    """Request body for signup. invite_code grants the ADMIN role when it matches."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    invite_code: str | None = None


class LoginRequest(APIModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenResponse(APIModel):
    """Access token plus the user it was issued for."""

    access_token: str
    token_type: str = "bearer"
    user: UserResponse
