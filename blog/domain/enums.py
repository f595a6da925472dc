"""Domain enumerations (roles, listing options, mutation kinds)."""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class UserRole(_ValuesMixin, str, Enum):
    """Role of a principal. Consulted only by the authorization layer."""

    USER = "USER"
    ADMIN = "ADMIN"


class PostStatusFilter(_ValuesMixin, str, Enum):
    """Publication filter for post listings."""

    ALL = "all"
    PUBLISHED = "published"
    UNPUBLISHED = "unpublished"


class PostSortField(_ValuesMixin, str, Enum):
    """Allow-listed sort fields (wire names)."""

    CREATED_AT = "createdAt"
    UPDATED_AT = "updatedAt"
    TITLE = "title"
    AUTHOR = "author"
    VIEWS = "views"
    LIKES = "likes"


class SortDirection(_ValuesMixin, str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


class MutationKind(_ValuesMixin, str, Enum):
    """Kinds of writes that make cached reads stale."""

    POST_CREATED = "post_created"
    POST_UPDATED = "post_updated"
    POST_DELETED = "post_deleted"
    POSTS_BULK_DELETED = "posts_bulk_deleted"
    COMMENT_CREATED = "comment_created"
    COMMENT_UPDATED = "comment_updated"
    COMMENT_DELETED = "comment_deleted"
    VIEW_REGISTERED = "view_registered"
    LIKE_TOGGLED = "like_toggled"
    USER_CREATED = "user_created"
    USER_UPDATED = "user_updated"
    USER_PASSWORD_CHANGED = "user_password_changed"
    USER_DELETED = "user_deleted"
