"""
Error handler tests: status mapping and response bodies.
"""

from __future__ import annotations

import asyncio
import json
from uuid import uuid4

import pytest
from fastapi import Request

from editorial.api.errors import engine_error_handler, error_body, status_for
from editorial.domain.entities import Post
from editorial.domain.errors import (
    ConflictError,
    DependencyFailureError,
    InvalidInputError,
    InvalidTransitionError,
    NotFoundError,
    PartialWriteError,
)


def make_request() -> Request:
    scope = {"type": "http", "method": "GET", "path": "/x", "headers": [], "query_string": b""}
    return Request(scope)


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (NotFoundError("Post", uuid4()), 404),
        (ConflictError("taken"), 409),
        (InvalidTransitionError("draft", "archived"), 409),
        (InvalidInputError("bad", field="title"), 422),
        (DependencyFailureError("locked"), 503),
    ],
)
def test_status_for(exc, expected) -> None:
    assert status_for(exc) == expected


def test_partial_write_body_lists_every_failed_step() -> None:
    post = Post(title="T", slug="t", content="c", author_id=uuid4())
    exc = PartialWriteError(
        post, {"tags": DependencyFailureError("a"), "seo": DependencyFailureError("b")}
    )

    body = error_body(exc)

    assert body["code"] == "partial_write"
    assert body["post_id"] == str(post.id)
    assert body["step"] == "tags"
    assert body["steps"] == ["tags", "seo"]


def test_handler_renders_engine_error() -> None:
    response = asyncio.run(
        engine_error_handler(make_request(), InvalidInputError("bad", field="title"))
    )
    assert response.status_code == 422
    assert json.loads(response.body)["field"] == "title"


def test_handler_reraises_foreign_exceptions() -> None:
    with pytest.raises(ValueError, match="boom"):
        asyncio.run(engine_error_handler(make_request(), ValueError("boom")))
