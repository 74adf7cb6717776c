from datetime import UTC, datetime
from typing import Any

from editorial.domain.entities import Post, PostStatus
from editorial.domain.errors import InvalidInputError, InvalidTransitionError

DEFAULT_TRANSITIONS: dict[PostStatus, list[PostStatus]] = {
    "draft": ["published", "scheduled"],
    "scheduled": ["published", "draft"],
    "published": ["archived", "draft"],
    "archived": ["draft"],
}


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def can_transition(
    current: PostStatus,
    new: PostStatus,
    transitions: dict[PostStatus, list[PostStatus]] | None = None,
) -> bool:
    """
    Determine if a status change is allowed.

    Staying in the same status is always allowed (a no-op that only
    touches updated_at).
    """
    if current == new:
        return True
    table = transitions if transitions is not None else DEFAULT_TRANSITIONS
    return new in table.get(current, [])


def transition(
    post: Post,
    new_status: PostStatus,
    now: datetime,
    *,
    scheduled_for: datetime | None = None,
    transitions: dict[PostStatus, list[PostStatus]] | None = None,
) -> Post:
    """
    Return a NEW Post with the updated status and timestamps.

    Raises InvalidTransitionError if the move is not in the table and
    InvalidInputError if scheduling lacks a future scheduled_for.
    """
    updates: dict[str, Any] = {"updated_at": now}

    if post.status == new_status:
        if scheduled_for is not None and new_status == "scheduled":
            require_future(scheduled_for, now)
            updates["scheduled_for"] = as_utc(scheduled_for)
        return post.model_copy(update=updates)

    if not can_transition(post.status, new_status, transitions):
        raise InvalidTransitionError(post.status, new_status)

    updates["status"] = new_status

    if new_status == "scheduled":
        target = scheduled_for if scheduled_for is not None else post.scheduled_for
        if target is None:
            raise InvalidInputError("scheduled_for is required for scheduling", field="scheduled_for")
        require_future(target, now)
        updates["scheduled_for"] = as_utc(target)

    if new_status == "published" and post.published_at is None:
        # published_at records the first publication and survives archive/unpublish
        updates["published_at"] = now

    if new_status == "draft" and post.status == "scheduled":
        updates["scheduled_for"] = None  # Unschedule

    return post.model_copy(update=updates)


def require_future(target: datetime, now: datetime) -> None:
    if as_utc(target) <= as_utc(now):
        raise InvalidInputError("scheduled_for must be in the future", field="scheduled_for")
