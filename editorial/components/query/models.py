"""
Query gateway models.

Filters are what callers pass; QuerySpec is the storage-neutral form
adapters compile into their own query language.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, Literal, TypeVar
from uuid import UUID

from editorial.domain.entities import CommentStatus, PostStatus

T = TypeVar("T")

ConditionOp = Literal["eq", "is_null", "prefix"]


# --- Filters ---


@dataclass(frozen=True)
class PostFilter:
    """Filters for listing posts. Free text matches title and content."""

    status: PostStatus | None = None
    category_id: UUID | None = None
    author_id: UUID | None = None
    search: str | None = None
    offset: int = 0
    limit: int | None = None


@dataclass(frozen=True)
class CommentFilter:
    """Filters for the moderation queue (root comments across posts)."""

    post_id: UUID | None = None
    status: CommentStatus | None = None
    offset: int = 0
    limit: int | None = None


@dataclass(frozen=True)
class MediaFilter:
    """Filters for the media library. file_type matches a MIME prefix."""

    uploaded_by: UUID | None = None
    file_type: str | None = None
    offset: int = 0
    limit: int | None = None


# --- Storage-neutral query ---


@dataclass(frozen=True)
class Condition:
    field: str
    op: ConditionOp
    value: object = None


@dataclass(frozen=True)
class QuerySpec:
    conditions: tuple[Condition, ...] = ()
    search_term: str | None = None
    search_fields: tuple[str, ...] = ()
    order_by: str = "created_at"
    descending: bool = True
    offset: int = 0
    limit: int = 10


# --- Results ---


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the unpaged total."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    offset: int = 0
    limit: int = 10

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total
