"""Application ports (Protocols). Infrastructure implements them.

No runtime imports from blog.infrastructure or blog.api.
"""

from blog.application.interfaces.repositories import (
    ICommentRepository,
    ILikeRepository,
    IPostRepository,
    IUserRepository,
)
from blog.application.interfaces.services import (
    ICacheInvalidator,
    ICacheStore,
    IPasswordHasher,
    ITokenIssuer,
)

__all__ = [
    "ICacheInvalidator",
    "ICacheStore",
    "ICommentRepository",
    "ILikeRepository",
    "IPasswordHasher",
    "IPostRepository",
    "ITokenIssuer",
    "IUserRepository",
]
