"""Cache key builders. Single place for key format (DRY).

Keys look like ``namespace:component:component``. Every component is
percent-encoded so it can never contain CACHE_KEY_SEP, which keeps keys
collision-free across distinct parameter tuples. Absent parameters are
replaced by their default token before joining, so a request that omits
a parameter and one that passes its default share one entry.
"""

from urllib.parse import quote

from blog.application.dtos.post import PostListQuery
from blog.core.constants import DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from blog.domain.enums import PostSortField, PostStatusFilter, SortDirection

CACHE_KEY_SEP = ":"

NS_POST_DETAIL = "post_detail"
NS_POST_LIST = "post_list"
NS_ALL_POSTS = "all_posts"
NS_POST_COMMENTS = "post_comments"
NS_ADMIN_USERS_LIST = "admin_users_list"

ALL_TOKEN = "all"
_SEARCH_PREFIX = "q-"


def _encode(value: object) -> str:
    return quote(str(value), safe="")


def _search_token(search: str | None) -> str:
    """'all' for no search; otherwise a prefixed token so a search for 'all' stays distinct.

    Matching is case-insensitive, so the term is lower-cased.
    """
    term = (search or "").strip()
    if not term:
        return ALL_TOKEN
    return _SEARCH_PREFIX + _encode(term.lower())


def _positive_or(value: int | None, default: int) -> int:
    return value if value is not None and value > 0 else default


def _join(namespace: str, *components: str) -> str:
    return CACHE_KEY_SEP.join((namespace, *components))


def namespace_of(key: str) -> str:
    """Return the namespace prefix of a key."""
    return key.split(CACHE_KEY_SEP, 1)[0]


def post_detail_key(post_id: str) -> str:
    """Cache key for a single post by ID."""
    return _join(NS_POST_DETAIL, _encode(post_id))


def post_list_key(
    search: str | None = None,
    status: PostStatusFilter = PostStatusFilter.ALL,
    sort_field: PostSortField = PostSortField.CREATED_AT,
    sort_dir: SortDirection = SortDirection.DESC,
    page: int | None = None,
    limit: int | None = None,
) -> str:
    """Cache key for one page of the filtered/sorted post listing.

    Callers pass normalized values (see post_query.build_list_query), so
    sort fallbacks share a key with the default ordering.
    """
    return _join(
        NS_POST_LIST,
        _search_token(search),
        status.value,
        sort_field.value,
        sort_dir.value,
        str(_positive_or(page, DEFAULT_PAGE)),
        str(_positive_or(limit, DEFAULT_PAGE_LIMIT)),
    )


def post_list_key_for(query: PostListQuery) -> str:
    """Cache key for a normalized listing query."""
    return post_list_key(
        search=query.search,
        status=query.status,
        sort_field=query.sort_field,
        sort_dir=query.sort_dir,
        page=query.page,
        limit=query.limit,
    )


def all_posts_key() -> str:
    """Cache key for the unpaginated list of every post."""
    return NS_ALL_POSTS


def post_comments_key(post_id: str) -> str:
    """Cache key for the comment thread of a post."""
    return _join(NS_POST_COMMENTS, _encode(post_id))


def admin_users_list_key(
    search: str | None = None,
    page: int | None = None,
    limit: int | None = None,
) -> str:
    """Cache key for one page of the admin user list."""
    return _join(
        NS_ADMIN_USERS_LIST,
        _search_token(search),
        str(_positive_or(page, DEFAULT_PAGE)),
        str(_positive_or(limit, DEFAULT_PAGE_LIMIT)),
    )
