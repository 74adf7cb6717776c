"""Post lifecycle input/output models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import UUID

from editorial.domain.entities import PostStatus

# Keys accepted in UpdatePostInput.changes. Slugs follow the title.
UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "title",
        "content",
        "excerpt",
        "featured_image",
        "status",
        "category_id",
        "scheduled_for",
    }
)


@dataclass(frozen=True)
class CreatePostInput:
    """Input for creating a post. tags/seo_settings of None mean "not supplied"."""

    title: str
    content: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: PostStatus = "draft"
    category_id: UUID | None = None
    scheduled_for: datetime | None = None
    tags: tuple[UUID, ...] | None = None
    seo_settings: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class UpdatePostInput:
    """
    Partial update. Only keys present in `changes` are touched; an
    explicit None clears an optional field.
    """

    changes: Mapping[str, Any] = field(default_factory=dict)
    tags: tuple[UUID, ...] | None = None
    seo_settings: Mapping[str, Any] | None = None


@dataclass(frozen=True)
class PublishDueError:
    post_id: UUID
    code: str
    message: str


@dataclass(frozen=True)
class PublishDueOutput:
    """Result of one scheduled-publication sweep."""

    published: list[UUID] = field(default_factory=list)
    errors: list[PublishDueError] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.published)

    @property
    def success(self) -> bool:
        return not self.errors
