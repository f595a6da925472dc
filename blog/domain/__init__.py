"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from blog.domain.enums import (
    MutationKind,
    PostSortField,
    PostStatusFilter,
    SortDirection,
    UserRole,
)
from blog.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    BlogException,
    ConflictException,
    ResourceNotFoundException,
    StorageFailureException,
    ValidationException,
)

__all__ = [
    # Enums
    "MutationKind",
    "PostSortField",
    "PostStatusFilter",
    "SortDirection",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "BlogException",
    "ConflictException",
    "ResourceNotFoundException",
    "StorageFailureException",
    "ValidationException",
]
