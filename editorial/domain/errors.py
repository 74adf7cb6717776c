"""
Engine error taxonomy.

NotFound       - id/slug lookup miss, or public fetch of a non-published post
Conflict       - slug collision surviving the pre-check, invalid state transition
InvalidInput   - missing required field, malformed reference
DependencyFailure - storage or blob store call failed

Collaborator failures are never retried here; they propagate as
DependencyFailureError and the caller owns retry policy.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from editorial.domain.entities import Post


class EngineError(Exception):
    """Base class for all engine errors."""

    code = "engine_error"


class NotFoundError(EngineError):
    code = "not_found"

    def __init__(self, entity: str, key: object) -> None:
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} {key} not found")


class ConflictError(EngineError):
    code = "conflict"


class InvalidTransitionError(ConflictError):
    """Raised when a post status transition is not in the state machine."""

    code = "invalid_transition"

    def __init__(self, from_status: str, to_status: str, reason: str = "") -> None:
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Cannot transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvalidInputError(EngineError):
    code = "invalid_input"

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class DependencyFailureError(EngineError):
    code = "dependency_failure"


class PartialWriteError(DependencyFailureError):
    """
    The base post row was written but one or more follow-up steps failed.

    The post is not rolled back. Every requested step is attempted;
    `steps` names the ones that failed ("tags", "seo") in the order they
    ran, and each can be re-issued on its own since both are idempotent.
    """

    code = "partial_write"

    def __init__(self, post: Post, failures: Mapping[str, BaseException]) -> None:
        self.post = post
        self.failures = dict(failures)
        self.steps = tuple(self.failures)
        details = "; ".join(
            f"'{step}' sync failed: {cause}" for step, cause in self.failures.items()
        )
        super().__init__(f"Post {post.id} saved but {details}")

    @property
    def step(self) -> str:
        """The first step that failed."""
        return self.steps[0]
