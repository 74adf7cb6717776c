"""
Post lifecycle component - state machine, scheduling, view counting.

State Machine:
- draft -> published | scheduled
- scheduled -> published (time reached or early publish) | draft (unschedule)
- published -> archived | draft (unpublish)
- archived -> draft (restore)

Guards:
- scheduling requires scheduled_for strictly in the future
- published_at is set on first publication and never cleared

Create/update write the post row in its own transaction, then run tag and
SEO sync. Both syncs are attempted; a failing sync does not roll the post
back, and PartialWriteError names every step that failed.

Scheduled posts are not published by this component on a timer;
publish_due() is the entry point for an external periodic sweep.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any
from uuid import UUID

from editorial.components.query import Page, PostFilter, post_query
from editorial.components.relations import RelationSyncComponent, validate_seo_fields
from editorial.components.slugs import SlugResolver
from editorial.domain.entities import POST_STATUSES, Post, Principal, PostStatus
from editorial.domain.errors import (
    EngineError,
    InvalidInputError,
    NotFoundError,
    PartialWriteError,
)
from editorial.domain.state import as_utc, require_future, transition
from editorial.rules.loader import default_rules
from editorial.rules.models import Rules

from .models import (
    UPDATABLE_FIELDS,
    CreatePostInput,
    PublishDueError,
    PublishDueOutput,
    UpdatePostInput,
)
from .ports import ClockPort, UnitOfWorkPort

logger = logging.getLogger(__name__)


# --- Validation Functions ---


def _require_text(value: Any, field: str, max_length: int | None = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field} is required", field=field)
    if max_length is not None and len(value.strip()) > max_length:
        raise InvalidInputError(f"{field} must be at most {max_length} characters", field=field)
    return value


def _require_status(value: Any) -> PostStatus:
    if value not in POST_STATUSES:
        raise InvalidInputError(f"Unknown post status: {value!r}", field="status")
    return value  # type: ignore[no-any-return]


class PostComponent:
    """Owns the post entity: create, update, read, list, delete, sweep."""

    def __init__(
        self,
        uow: UnitOfWorkPort,
        clock: ClockPort,
        rules: Rules | None = None,
        *,
        relations: RelationSyncComponent | None = None,
        slugs: SlugResolver | None = None,
    ) -> None:
        self._uow = uow
        self._clock = clock
        self._rules = rules or default_rules()
        self._relations = relations or RelationSyncComponent(uow, clock)
        self._slugs = slugs or SlugResolver(
            max_length=self._rules.slugs.max_length,
            fallback=self._rules.slugs.fallback,
        )

    # --- Writes ---

    def create(self, inp: CreatePostInput, principal: Principal) -> Post:
        title = _require_text(inp.title, "title", self._rules.posts.title_max_length).strip()
        content = _require_text(inp.content, "content")
        status = _require_status(inp.status)
        if status not in self._rules.posts.creatable_statuses:
            raise InvalidInputError(f"Posts cannot be created as '{status}'", field="status")
        if inp.seo_settings is not None:
            validate_seo_fields(inp.seo_settings)

        now = self._clock.now_utc()
        scheduled_for = as_utc(inp.scheduled_for) if inp.scheduled_for is not None else None
        if status == "scheduled":
            if scheduled_for is None:
                raise InvalidInputError(
                    "scheduled_for is required for scheduling", field="scheduled_for"
                )
            require_future(scheduled_for, now)

        with self._uow as uow:
            if inp.category_id is not None:
                self._check_category(uow, inp.category_id)
            if inp.tags is not None:
                self._relations.check_tags(uow, inp.tags)

            post = Post(
                title=title,
                slug=self._slugs.resolve(title, uow.posts.slug_exists),
                content=content,
                excerpt=inp.excerpt,
                featured_image=inp.featured_image,
                status=status,
                category_id=inp.category_id,
                author_id=principal.id,
                published_at=now if status == "published" else None,
                scheduled_for=scheduled_for,
                created_at=now,
                updated_at=now,
            )
            uow.posts.insert(post)
            uow.commit()

        logger.info("Created post %s (%s) as %s", post.id, post.slug, post.status)
        self._sync_relations(post, inp.tags, inp.seo_settings)
        return post

    def update(self, post_id: UUID, inp: UpdatePostInput) -> Post:
        changes = dict(inp.changes)
        unknown = sorted(set(changes) - UPDATABLE_FIELDS)
        if unknown:
            raise InvalidInputError(f"Fields cannot be updated: {', '.join(unknown)}")
        if inp.seo_settings is not None:
            validate_seo_fields(inp.seo_settings)

        now = self._clock.now_utc()

        with self._uow as uow:
            post = uow.posts.get_by_id(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)

            updates: dict[str, Any] = {}
            if "title" in changes:
                title = _require_text(
                    changes["title"], "title", self._rules.posts.title_max_length
                ).strip()
                if title != post.title:
                    updates["title"] = title
                    updates["slug"] = self._slugs.resolve(
                        title, lambda s: uow.posts.slug_exists(s, exclude_id=post.id)
                    )
            if "content" in changes:
                updates["content"] = _require_text(changes["content"], "content")
            for name in ("excerpt", "featured_image"):
                if name in changes:
                    updates[name] = changes[name]
            if "category_id" in changes:
                if changes["category_id"] is not None:
                    self._check_category(uow, changes["category_id"])
                updates["category_id"] = changes["category_id"]
            if inp.tags is not None:
                self._relations.check_tags(uow, inp.tags)

            target = _require_status(changes.get("status", post.status))
            scheduled_for = changes.get("scheduled_for")
            if target != "scheduled" and "scheduled_for" in changes:
                updates["scheduled_for"] = as_utc(scheduled_for) if scheduled_for else None

            updated = transition(
                post.model_copy(update=updates),
                target,
                now,
                scheduled_for=scheduled_for if target == "scheduled" else None,
                transitions=self._rules.posts.status_machine,
            )
            uow.posts.update(updated)
            uow.commit()

        if updated.status != post.status:
            logger.info("Post %s: %s -> %s", post_id, post.status, updated.status)
        self._sync_relations(updated, inp.tags, inp.seo_settings)
        return updated

    def set_status(
        self,
        post_id: UUID,
        status: PostStatus,
        scheduled_for: datetime | None = None,
    ) -> Post:
        """Shorthand for an update that only moves the post through the state machine."""
        changes: dict[str, Any] = {"status": status}
        if scheduled_for is not None:
            changes["scheduled_for"] = scheduled_for
        return self.update(post_id, UpdatePostInput(changes=changes))

    def delete(self, post_id: UUID) -> None:
        """Delete a post with its tag links, SEO settings and comments."""
        with self._uow as uow:
            if uow.posts.get_by_id(post_id) is None:
                raise NotFoundError("Post", post_id)
            uow.post_tags.delete_for_post(post_id)
            uow.seo.delete_for_post(post_id)
            uow.comments.delete_for_post(post_id)
            uow.posts.delete(post_id)
            uow.commit()
        logger.info("Deleted post %s", post_id)

    # --- Reads ---

    def get(self, post_id: UUID) -> Post:
        with self._uow as uow:
            post = uow.posts.get_by_id(post_id)
        if post is None:
            raise NotFoundError("Post", post_id)
        return post

    def get_by_slug(self, slug: str, include_unpublished: bool = False) -> Post:
        """
        Fetch a post by slug.

        The public path (include_unpublished=False) only sees published
        posts and counts a view on every successful fetch.
        """
        with self._uow as uow:
            post = uow.posts.get_by_slug(slug)
            if post is None or (not include_unpublished and post.status != "published"):
                raise NotFoundError("Post", slug)
            if include_unpublished:
                return post
            views = uow.posts.increment_view_count(post.id)
            uow.commit()
        return post.model_copy(update={"view_count": views})

    def list(self, flt: PostFilter) -> Page[Post]:
        spec = post_query(flt, self._rules.pagination)
        with self._uow as uow:
            items, total = uow.posts.query(spec)
        return Page(items=items, total=total, offset=spec.offset, limit=spec.limit)

    def list_published(self, flt: PostFilter) -> Page[Post]:
        return self.list(dataclasses.replace(flt, status="published"))

    # --- Scheduling sweep ---

    def publish_due(self, now: datetime | None = None) -> PublishDueOutput:
        """
        Publish every scheduled post whose scheduled_for has passed.

        Each post goes through update(); one failure does not stop the sweep.
        """
        cutoff = as_utc(now) if now is not None else self._clock.now_utc()
        with self._uow as uow:
            due = uow.posts.list_scheduled_due(cutoff)

        published: list[UUID] = []
        errors: list[PublishDueError] = []
        for post in due:
            try:
                self.set_status(post.id, "published")
                published.append(post.id)
            except EngineError as e:
                logger.warning("Scheduled publish of post %s failed: %s", post.id, e)
                errors.append(PublishDueError(post_id=post.id, code=e.code, message=str(e)))

        logger.info("Published %d of %d due posts", len(published), len(due))
        return PublishDueOutput(published=published, errors=errors)

    # --- Helpers ---

    def _check_category(self, uow: UnitOfWorkPort, category_id: UUID) -> None:
        if uow.categories.get_by_id(category_id) is None:
            raise InvalidInputError(f"Unknown category {category_id}", field="category_id")

    def _sync_relations(
        self,
        post: Post,
        tags: tuple[UUID, ...] | None,
        seo_settings: Mapping[str, Any] | None,
    ) -> None:
        # A failed tag sync does not stop the SEO write
        failures: dict[str, EngineError] = {}
        if tags is not None:
            try:
                self._relations.sync_tags(post.id, tags)
            except EngineError as e:
                logger.warning("Post %s saved, tag sync failed: %s", post.id, e)
                failures["tags"] = e
        if seo_settings is not None:
            try:
                self._relations.sync_seo_settings(post.id, seo_settings)
            except EngineError as e:
                logger.warning("Post %s saved, SEO sync failed: %s", post.id, e)
                failures["seo"] = e
        if failures:
            raise PartialWriteError(post, failures) from next(iter(failures.values()))
