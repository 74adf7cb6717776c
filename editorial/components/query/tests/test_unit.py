"""
Query gateway unit tests.
"""

from __future__ import annotations

from uuid import uuid4

import pytest

from editorial.components.query import (
    CommentFilter,
    Condition,
    MediaFilter,
    Page,
    PostFilter,
    comment_query,
    media_query,
    post_query,
    resolve_page,
)
from editorial.domain.errors import InvalidInputError
from editorial.rules.models import PaginationRules

RULES = PaginationRules(default_limit=10, max_limit=50)


class TestResolvePage:
    def test_defaults(self) -> None:
        assert resolve_page(0, None, RULES) == (0, 10)

    def test_limit_clamped_to_max(self) -> None:
        assert resolve_page(20, 500, RULES) == (20, 50)

    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            resolve_page(-1, 10, RULES)
        assert exc.value.field == "offset"

    def test_zero_limit_rejected(self) -> None:
        with pytest.raises(InvalidInputError) as exc:
            resolve_page(0, 0, RULES)
        assert exc.value.field == "limit"


class TestPostQuery:
    def test_filters_become_conditions(self) -> None:
        category_id, author_id = uuid4(), uuid4()
        spec = post_query(
            PostFilter(status="published", category_id=category_id, author_id=author_id),
            RULES,
        )
        assert Condition("status", "eq", "published") in spec.conditions
        assert Condition("category_id", "eq", category_id) in spec.conditions
        assert Condition("author_id", "eq", author_id) in spec.conditions
        assert spec.order_by == "created_at"
        assert spec.descending is True

    def test_search_matches_title_and_content(self) -> None:
        spec = post_query(PostFilter(search="  derby  "), RULES)
        assert spec.search_term == "derby"
        assert spec.search_fields == ("title", "content")

    def test_blank_search_ignored(self) -> None:
        assert post_query(PostFilter(search="   "), RULES).search_term is None


class TestCommentAndMediaQuery:
    def test_comment_query_is_roots_only(self) -> None:
        spec = comment_query(CommentFilter(status="pending"), RULES)
        assert Condition("parent_id", "is_null") in spec.conditions
        assert Condition("status", "eq", "pending") in spec.conditions

    def test_media_file_type_is_prefix_match(self) -> None:
        spec = media_query(MediaFilter(file_type="image/"), RULES)
        assert spec.conditions == (Condition("file_type", "prefix", "image/"),)


class TestPage:
    def test_has_more(self) -> None:
        assert Page(items=[1, 2], total=5, offset=0, limit=2).has_more
        assert not Page(items=[5], total=5, offset=4, limit=2).has_more
