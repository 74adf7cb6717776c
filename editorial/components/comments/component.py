"""
Comment moderation component.

State machine: pending -> approved | spam | trash, and moderators may move
any comment to any status afterwards. Creation always enters pending.

Threading is one level deep: a reply must point at a root comment on the
same post. Replies to replies are rejected at create time.

Public listing (only_approved=True) returns approved roots only. Whether
the filter also applies to replies is a product decision carried by
rules.comments.public_replies_require_approval.
"""

from __future__ import annotations

import logging
import re
from uuid import UUID

from editorial.components.query import CommentFilter, Page, comment_query
from editorial.domain.entities import (
    COMMENT_STATUSES,
    Comment,
    CommentStatus,
    CommentThread,
)
from editorial.domain.errors import InvalidInputError, NotFoundError
from editorial.rules.loader import default_rules
from editorial.rules.models import Rules

from .models import CreateCommentInput
from .ports import ClockPort, UnitOfWorkPort

logger = logging.getLogger(__name__)

_EMAIL = re.compile(r"^[^@\s]+@[^@\s]+$")


# --- Validation Functions ---


def validate_comment(inp: CreateCommentInput, max_content_length: int) -> None:
    for field in ("author_name", "author_email", "content"):
        value = getattr(inp, field)
        if not isinstance(value, str) or not value.strip():
            raise InvalidInputError(f"{field} is required", field=field)
    if not _EMAIL.match(inp.author_email.strip()):
        raise InvalidInputError("author_email is not a valid address", field="author_email")
    if len(inp.content) > max_content_length:
        raise InvalidInputError(
            f"content must be at most {max_content_length} characters", field="content"
        )


def _require_status(value: object) -> CommentStatus:
    if value not in COMMENT_STATUSES:
        raise InvalidInputError(f"Unknown comment status: {value!r}", field="status")
    return value  # type: ignore[return-value]


class CommentComponent:
    """Creates, moderates, lists and deletes reader comments."""

    def __init__(self, uow: UnitOfWorkPort, clock: ClockPort, rules: Rules | None = None) -> None:
        self._uow = uow
        self._clock = clock
        self._rules = rules or default_rules()

    def create(self, inp: CreateCommentInput) -> Comment:
        validate_comment(inp, self._rules.comments.max_content_length)

        with self._uow as uow:
            if uow.posts.get_by_id(inp.post_id) is None:
                raise InvalidInputError(f"Unknown post {inp.post_id}", field="post_id")

            if inp.parent_id is not None:
                parent = uow.comments.get_by_id(inp.parent_id)
                if parent is None:
                    raise InvalidInputError(f"Unknown parent comment {inp.parent_id}", field="parent_id")
                if parent.post_id != inp.post_id:
                    raise InvalidInputError("Parent comment belongs to another post", field="parent_id")
                if not parent.is_root:
                    raise InvalidInputError("Replies to replies are not supported", field="parent_id")

            comment = Comment(
                post_id=inp.post_id,
                parent_id=inp.parent_id,
                author_name=inp.author_name.strip(),
                author_email=inp.author_email.strip(),
                content=inp.content,
                status="pending",
                ip_address=inp.ip_address,
                user_agent=inp.user_agent,
                created_at=self._clock.now_utc(),
            )
            uow.comments.insert(comment)
            uow.commit()

        logger.info("Comment %s queued for moderation on post %s", comment.id, comment.post_id)
        return comment

    def set_status(self, comment_id: UUID, status: CommentStatus) -> Comment:
        status = _require_status(status)
        with self._uow as uow:
            comment = uow.comments.get_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            if comment.status != status:
                uow.comments.set_status(comment_id, status)
                uow.commit()
                logger.info("Comment %s: %s -> %s", comment_id, comment.status, status)
        return comment.model_copy(update={"status": status})

    def delete(self, comment_id: UUID) -> None:
        """Delete a comment; deleting a root also deletes its replies."""
        with self._uow as uow:
            comment = uow.comments.get_by_id(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            replies = uow.comments.delete_replies(comment_id) if comment.is_root else 0
            uow.comments.delete(comment_id)
            uow.commit()
        logger.info("Deleted comment %s (%d replies)", comment_id, replies)

    def get(self, comment_id: UUID) -> Comment:
        with self._uow as uow:
            comment = uow.comments.get_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", comment_id)
        return comment

    def list_for_post(self, post_id: UUID, only_approved: bool = True) -> list[CommentThread]:
        """Root comments newest first, each with its replies oldest first."""
        root_status: CommentStatus | None = "approved" if only_approved else None
        reply_status: CommentStatus | None = None
        if only_approved and self._rules.comments.public_replies_require_approval:
            reply_status = "approved"

        with self._uow as uow:
            roots = uow.comments.list_roots(post_id, status=root_status)
            replies = uow.comments.list_replies([r.id for r in roots], status=reply_status)

        by_parent: dict[UUID, list[Comment]] = {}
        for reply in replies:
            if reply.parent_id is not None:
                by_parent.setdefault(reply.parent_id, []).append(reply)
        return [CommentThread(comment=root, replies=by_parent.get(root.id, [])) for root in roots]

    def list(self, flt: CommentFilter) -> Page[Comment]:
        """Moderation queue: root comments across posts, newest first."""
        if flt.status is not None:
            _require_status(flt.status)
        spec = comment_query(flt, self._rules.pagination)
        with self._uow as uow:
            items, total = uow.comments.query(spec)
        return Page(items=items, total=total, offset=spec.offset, limit=spec.limit)
