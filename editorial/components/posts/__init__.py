"""Post lifecycle - state machine, scheduling and view counting."""

from .component import PostComponent
from .models import (
    UPDATABLE_FIELDS,
    CreatePostInput,
    PublishDueError,
    PublishDueOutput,
    UpdatePostInput,
)

__all__ = [
    "PostComponent",
    "UPDATABLE_FIELDS",
    "CreatePostInput",
    "PublishDueError",
    "PublishDueOutput",
    "UpdatePostInput",
]
