"""Query gateway - filtering and pagination contract."""

from .component import (
    POST_SEARCH_FIELDS,
    comment_query,
    media_query,
    post_query,
    resolve_page,
)
from .models import (
    CommentFilter,
    Condition,
    MediaFilter,
    Page,
    PostFilter,
    QuerySpec,
)
from .ports import QueryablePort

__all__ = [
    "POST_SEARCH_FIELDS",
    "comment_query",
    "media_query",
    "post_query",
    "resolve_page",
    "CommentFilter",
    "Condition",
    "MediaFilter",
    "Page",
    "PostFilter",
    "QuerySpec",
    "QueryablePort",
]
