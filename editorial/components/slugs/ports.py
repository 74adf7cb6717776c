"""Slug resolver port definitions."""

from typing import Protocol


class SlugExistsPort(Protocol):
    """Existence predicate over a slug namespace (posts, categories, tags)."""

    def __call__(self, slug: str) -> bool:
        """Return True if `slug` is already taken. Storage failures must raise."""
        ...


class SuffixSourcePort(Protocol):
    """Source of disambiguation suffixes."""

    def __call__(self) -> int:
        """Return a high-resolution, increasing number."""
        ...
