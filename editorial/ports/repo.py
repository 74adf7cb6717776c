"""
Storage port definitions.

Protocol-based interfaces for the transactional store the engine runs
against. Implementations: SQLite (editorial.adapters.sqlite).

Every method may raise DependencyFailureError when the store is
unreachable; writes raise ConflictError when a UNIQUE constraint fails.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from editorial.components.query.models import QuerySpec
from editorial.domain.entities import (
    Category,
    Comment,
    CommentStatus,
    Media,
    Post,
    Profile,
    SEOSettings,
    Tag,
)

# -----------------------------------------------------------------------------
# Posts
# -----------------------------------------------------------------------------


class PostRepoPort(Protocol):
    def get_by_id(self, post_id: UUID) -> Post | None:
        ...

    def get_by_slug(self, slug: str) -> Post | None:
        ...

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        ...

    def insert(self, post: Post) -> Post:
        ...

    def update(self, post: Post) -> Post:
        ...

    def delete(self, post_id: UUID) -> bool:
        """Delete the post row. Returns False if it did not exist."""
        ...

    def increment_view_count(self, post_id: UUID) -> int:
        """Atomically add one view and return the new count."""
        ...

    def query(self, spec: QuerySpec) -> tuple[list[Post], int]:
        ...

    def list_scheduled_due(self, now_utc: datetime) -> list[Post]:
        """Scheduled posts whose scheduled_for is at or before now."""
        ...

    def clear_category(self, category_id: UUID) -> int:
        ...


class PostTagRepoPort(Protocol):
    def list_tag_ids(self, post_id: UUID) -> set[UUID]:
        ...

    def list_tags(self, post_id: UUID) -> list[Tag]:
        ...

    def add(self, post_id: UUID, tag_ids: Iterable[UUID]) -> int:
        ...

    def remove(self, post_id: UUID, tag_ids: Iterable[UUID]) -> int:
        ...

    def delete_for_post(self, post_id: UUID) -> int:
        ...

    def delete_for_tag(self, tag_id: UUID) -> int:
        ...


class SeoRepoPort(Protocol):
    def get_by_post(self, post_id: UUID) -> SEOSettings | None:
        ...

    def insert(self, seo: SEOSettings) -> SEOSettings:
        ...

    def update(self, seo: SEOSettings) -> SEOSettings:
        ...

    def delete_for_post(self, post_id: UUID) -> int:
        ...


# -----------------------------------------------------------------------------
# Comments
# -----------------------------------------------------------------------------


class CommentRepoPort(Protocol):
    def get_by_id(self, comment_id: UUID) -> Comment | None:
        ...

    def insert(self, comment: Comment) -> Comment:
        ...

    def set_status(self, comment_id: UUID, status: CommentStatus) -> bool:
        ...

    def delete(self, comment_id: UUID) -> bool:
        ...

    def delete_replies(self, parent_id: UUID) -> int:
        ...

    def delete_for_post(self, post_id: UUID) -> int:
        ...

    def list_roots(self, post_id: UUID, status: CommentStatus | None = None) -> list[Comment]:
        """Root comments of a post, newest first."""
        ...

    def list_replies(
        self, parent_ids: Iterable[UUID], status: CommentStatus | None = None
    ) -> list[Comment]:
        """Replies to the given roots, oldest first."""
        ...

    def query(self, spec: QuerySpec) -> tuple[list[Comment], int]:
        ...


# -----------------------------------------------------------------------------
# Taxonomy
# -----------------------------------------------------------------------------


class CategoryRepoPort(Protocol):
    def get_by_id(self, category_id: UUID) -> Category | None:
        ...

    def get_many(self, category_ids: Iterable[UUID]) -> list[Category]:
        """Categories with the given ids; unknown ids are skipped."""
        ...

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        ...

    def insert(self, category: Category) -> Category:
        ...

    def update(self, category: Category) -> Category:
        ...

    def delete(self, category_id: UUID) -> bool:
        ...

    def list_with_counts(self) -> list[tuple[Category, int]]:
        """All categories ordered by name, each with its post count."""
        ...


class TagRepoPort(Protocol):
    def get_by_id(self, tag_id: UUID) -> Tag | None:
        ...

    def slug_exists(self, slug: str, exclude_id: UUID | None = None) -> bool:
        ...

    def existing_ids(self, tag_ids: Iterable[UUID]) -> set[UUID]:
        ...

    def insert(self, tag: Tag) -> Tag:
        ...

    def update(self, tag: Tag) -> Tag:
        ...

    def delete(self, tag_id: UUID) -> bool:
        ...

    def list_all(self) -> list[Tag]:
        ...


# -----------------------------------------------------------------------------
# Media / Profiles
# -----------------------------------------------------------------------------


class MediaRepoPort(Protocol):
    def get_by_id(self, media_id: UUID) -> Media | None:
        ...

    def insert(self, media: Media) -> Media:
        ...

    def delete(self, media_id: UUID) -> bool:
        ...

    def query(self, spec: QuerySpec) -> tuple[list[Media], int]:
        ...


class ProfileRepoPort(Protocol):
    def get_by_id(self, profile_id: UUID) -> Profile | None:
        ...

    def get_many(self, profile_ids: Iterable[UUID]) -> list[Profile]:
        ...

    def get_by_email(self, email: str) -> Profile | None:
        ...

    def insert(self, profile: Profile) -> Profile:
        ...

    def update(self, profile: Profile) -> Profile:
        ...

    def list_all(self) -> list[Profile]:
        """All profiles, newest first."""
        ...


# -----------------------------------------------------------------------------
# Unit of Work (Transaction Management)
# -----------------------------------------------------------------------------


class UnitOfWorkPort(Protocol):
    """
    Unit of Work pattern for transaction management.

    Usage:
        with uow:
            uow.posts.insert(post)
            uow.commit()

    Leaving the block without commit() rolls back. A unit of work may be
    entered again after it exits; nesting is not supported.
    """

    posts: PostRepoPort
    post_tags: PostTagRepoPort
    seo: SeoRepoPort
    comments: CommentRepoPort
    categories: CategoryRepoPort
    tags: TagRepoPort
    media: MediaRepoPort
    profiles: ProfileRepoPort

    def __enter__(self) -> UnitOfWorkPort:
        ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...
