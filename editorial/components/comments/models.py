"""Comment moderation input models."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class CreateCommentInput:
    """
    Reader-submitted comment. There is deliberately no status field:
    every new comment enters moderation as pending.
    """

    post_id: UUID
    author_name: str
    author_email: str
    content: str
    parent_id: UUID | None = None
    ip_address: str | None = None
    user_agent: str | None = None
