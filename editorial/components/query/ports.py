"""Query gateway port definitions."""

from __future__ import annotations

from typing import Protocol, TypeVar

from .models import QuerySpec

T_co = TypeVar("T_co", covariant=True)


class QueryablePort(Protocol[T_co]):
    """A repository that can answer a QuerySpec with (items, total)."""

    def query(self, spec: QuerySpec) -> tuple[list[T_co], int]:  # type: ignore[misc]
        ...
