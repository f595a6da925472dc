"""Core constants: listing defaults and allow-lists shared by API and use cases."""

# Pagination defaults (absent or non-positive values fall back to these)
DEFAULT_PAGE = 1
DEFAULT_PAGE_LIMIT = 10

# Comment content bounds
COMMENT_MAX_LENGTH = 5000

# Post field bounds
POST_TITLE_MAX_LENGTH = 300
POST_TAG_MAX_LENGTH = 50
POST_MAX_TAGS = 20
