"""
Query gateway - the filtering/pagination contract shared by the post,
comment and media listings.

Builds QuerySpec values from caller filters; adapters compile them.
Ordering is newest-created first unless a builder says otherwise.
"""

from __future__ import annotations

from editorial.domain.errors import InvalidInputError
from editorial.rules.models import PaginationRules

from .models import (
    CommentFilter,
    Condition,
    MediaFilter,
    PostFilter,
    QuerySpec,
)

POST_SEARCH_FIELDS = ("title", "content")


def resolve_page(offset: int, limit: int | None, rules: PaginationRules) -> tuple[int, int]:
    """
    Validate and clamp pagination.

    A missing limit takes the configured default; limits above the
    configured maximum are clamped to it.
    """
    if offset < 0:
        raise InvalidInputError("offset must be >= 0", field="offset")
    if limit is None:
        limit = rules.default_limit
    if limit < 1:
        raise InvalidInputError("limit must be >= 1", field="limit")
    return offset, min(limit, rules.max_limit)


def _search_term(raw: str | None) -> str | None:
    if raw is None:
        return None
    term = raw.strip()
    return term or None


def post_query(flt: PostFilter, rules: PaginationRules) -> QuerySpec:
    offset, limit = resolve_page(flt.offset, flt.limit, rules)
    conditions: list[Condition] = []
    if flt.status is not None:
        conditions.append(Condition("status", "eq", flt.status))
    if flt.category_id is not None:
        conditions.append(Condition("category_id", "eq", flt.category_id))
    if flt.author_id is not None:
        conditions.append(Condition("author_id", "eq", flt.author_id))
    return QuerySpec(
        conditions=tuple(conditions),
        search_term=_search_term(flt.search),
        search_fields=POST_SEARCH_FIELDS,
        offset=offset,
        limit=limit,
    )


def comment_query(flt: CommentFilter, rules: PaginationRules) -> QuerySpec:
    """Root comments only; replies are reached through their thread."""
    offset, limit = resolve_page(flt.offset, flt.limit, rules)
    conditions: list[Condition] = [Condition("parent_id", "is_null")]
    if flt.post_id is not None:
        conditions.append(Condition("post_id", "eq", flt.post_id))
    if flt.status is not None:
        conditions.append(Condition("status", "eq", flt.status))
    return QuerySpec(conditions=tuple(conditions), offset=offset, limit=limit)


def media_query(flt: MediaFilter, rules: PaginationRules) -> QuerySpec:
    offset, limit = resolve_page(flt.offset, flt.limit, rules)
    conditions: list[Condition] = []
    if flt.uploaded_by is not None:
        conditions.append(Condition("uploaded_by", "eq", flt.uploaded_by))
    if flt.file_type:
        conditions.append(Condition("file_type", "prefix", flt.file_type))
    return QuerySpec(conditions=tuple(conditions), offset=offset, limit=limit)
