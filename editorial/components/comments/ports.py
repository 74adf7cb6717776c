"""Comment moderation port definitions."""

from editorial.ports.clock import ClockPort
from editorial.ports.repo import CommentRepoPort, PostRepoPort, UnitOfWorkPort

__all__ = ["ClockPort", "CommentRepoPort", "PostRepoPort", "UnitOfWorkPort"]
