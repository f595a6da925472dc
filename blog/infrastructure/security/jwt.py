"""JWT access tokens carrying the principal's id (sub) and role.

Secret, algorithm and lifetime come from blog.core.config.
"""

from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from blog.core.config import get_settings
from blog.shared.utils.datetime import utc_now


def create_access_token(
    data: dict[str, Any],
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token with the given claims (expects sub and role).

    Args:
        data: Claims to encode.
        expires_delta: Optional TTL; else uses settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    to_encode = data.copy()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    to_encode["exp"] = utc_now() + lifetime
    encoded = jwt.encode(
        to_encode,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Verify and decode a token; raise ValueError if invalid, expired or missing sub/role."""
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    for claim in ("sub", "role"):
        if claim not in payload:
            raise ValueError(f"Token missing required claim: {claim}")
    return payload
