"""Relation sync component input/output models."""

from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID


@dataclass(frozen=True)
class TagDiff:
    """Set difference between current and desired tag assignments."""

    additions: frozenset[UUID] = frozenset()
    removals: frozenset[UUID] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not self.additions and not self.removals


@dataclass(frozen=True)
class TagSyncResult:
    post_id: UUID
    added: frozenset[UUID] = frozenset()
    removed: frozenset[UUID] = frozenset()

    @property
    def writes(self) -> int:
        return len(self.added) + len(self.removed)


@dataclass(frozen=True)
class SeoSyncResult:
    post_id: UUID
    created: bool = False
    changed_fields: tuple[str, ...] = field(default_factory=tuple)

    @property
    def writes(self) -> int:
        return 1 if self.created or self.changed_fields else 0
