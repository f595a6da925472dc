"""FastAPI dependencies (composition root). Routes import from here only."""

from blog.api.v1.dependencies.auth import (
    AuthSecurity,
    get_auth_security,
    get_principal,
    get_principal_optional,
    require_admin,
)
from blog.api.v1.dependencies.db import (
    get_cache,
    get_db,
    get_db_transactional,
    get_invalidator,
)
from blog.api.v1.dependencies.query import get_post_list_query
from blog.api.v1.dependencies.services import (
    get_comment_service,
    get_engagement_service,
    get_post_reader,
    get_post_service,
    get_user_service,
)

__all__ = [
    "AuthSecurity",
    "get_auth_security",
    "get_cache",
    "get_comment_service",
    "get_db",
    "get_db_transactional",
    "get_engagement_service",
    "get_invalidator",
    "get_post_list_query",
    "get_post_reader",
    "get_post_service",
    "get_principal",
    "get_principal_optional",
    "get_user_service",
    "require_admin",
]
