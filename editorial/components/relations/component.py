"""
Relation sync - converges a post's tag set and SEO settings to a target.

Tags: diff-based. Only (desired - current) is inserted and only
(current - desired) is deleted, inside one transaction, so readers never
observe an empty tag window.

SEO: upsert keyed on post_id. Omitted fields are left unchanged; an
explicit None clears a field.

Both operations are idempotent: repeating a call with the same target
performs no writes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from uuid import UUID

from editorial.domain.entities import SEO_FIELDS, SEOSettings, Tag
from editorial.domain.errors import InvalidInputError, NotFoundError

from .models import SeoSyncResult, TagDiff, TagSyncResult
from .ports import ClockPort, UnitOfWorkPort

logger = logging.getLogger(__name__)


# --- Pure Functions (Functional Core) ---


def diff_tags(current: Iterable[UUID], desired: Iterable[UUID]) -> TagDiff:
    current_set = frozenset(current)
    desired_set = frozenset(desired)
    return TagDiff(additions=desired_set - current_set, removals=current_set - desired_set)


def validate_seo_fields(desired: Mapping[str, Any]) -> None:
    unknown = sorted(set(desired) - set(SEO_FIELDS))
    if unknown:
        raise InvalidInputError(f"Unknown SEO fields: {', '.join(unknown)}", field="seo_settings")
    for name, value in desired.items():
        if value is not None and not isinstance(value, str):
            raise InvalidInputError(f"SEO field {name} must be text or null", field="seo_settings")


def seo_changes(existing: SEOSettings, desired: Mapping[str, Any]) -> dict[str, Any]:
    """Fields of `desired` whose value differs from `existing`."""
    return {
        name: value for name, value in desired.items() if getattr(existing, name) != value
    }


# --- Component ---


class RelationSyncComponent:
    """Reconciles PostTag rows and the SEOSettings row of a post."""

    def __init__(self, uow: UnitOfWorkPort, clock: ClockPort) -> None:
        self._uow = uow
        self._clock = clock

    def check_tags(self, uow: UnitOfWorkPort, tag_ids: Iterable[UUID]) -> frozenset[UUID]:
        """Validate tag references inside an open unit of work."""
        wanted = frozenset(tag_ids)
        missing = wanted - uow.tags.existing_ids(wanted)
        if missing:
            listed = ", ".join(sorted(str(t) for t in missing))
            raise InvalidInputError(f"Unknown tag ids: {listed}", field="tags")
        return wanted

    def sync_tags(self, post_id: UUID, desired_tag_ids: Iterable[UUID]) -> TagSyncResult:
        with self._uow as uow:
            if uow.posts.get_by_id(post_id) is None:
                raise NotFoundError("Post", post_id)
            desired = self.check_tags(uow, desired_tag_ids)

            diff = diff_tags(uow.post_tags.list_tag_ids(post_id), desired)
            if diff.is_empty:
                return TagSyncResult(post_id=post_id)

            if diff.removals:
                uow.post_tags.remove(post_id, diff.removals)
            if diff.additions:
                uow.post_tags.add(post_id, diff.additions)
            uow.commit()

        logger.debug(
            "Synced tags for post %s: +%d -%d", post_id, len(diff.additions), len(diff.removals)
        )
        return TagSyncResult(post_id=post_id, added=diff.additions, removed=diff.removals)

    def sync_seo_settings(self, post_id: UUID, desired: Mapping[str, Any]) -> SeoSyncResult:
        validate_seo_fields(desired)
        now = self._clock.now_utc()

        with self._uow as uow:
            if uow.posts.get_by_id(post_id) is None:
                raise NotFoundError("Post", post_id)

            existing = uow.seo.get_by_post(post_id)
            if existing is None:
                seo = SEOSettings(post_id=post_id, created_at=now, updated_at=now, **desired)
                uow.seo.insert(seo)
                uow.commit()
                logger.debug("Created SEO settings for post %s", post_id)
                return SeoSyncResult(post_id=post_id, created=True, changed_fields=tuple(desired))

            changes = seo_changes(existing, desired)
            if not changes:
                return SeoSyncResult(post_id=post_id)

            uow.seo.update(existing.model_copy(update={**changes, "updated_at": now}))
            uow.commit()

        logger.debug("Updated SEO fields %s for post %s", sorted(changes), post_id)
        return SeoSyncResult(post_id=post_id, changed_fields=tuple(sorted(changes)))

    def tags_for_post(self, post_id: UUID) -> list[Tag]:
        """Tags assigned to a post, by name. Empty for unknown or deleted posts."""
        with self._uow as uow:
            return uow.post_tags.list_tags(post_id)

    def seo_for_post(self, post_id: UUID) -> SEOSettings | None:
        with self._uow as uow:
            return uow.seo.get_by_post(post_id)
