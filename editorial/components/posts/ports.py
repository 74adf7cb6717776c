"""Post lifecycle port definitions."""

from editorial.ports.clock import ClockPort
from editorial.ports.repo import (
    CategoryRepoPort,
    PostRepoPort,
    UnitOfWorkPort,
)

__all__ = ["CategoryRepoPort", "ClockPort", "PostRepoPort", "UnitOfWorkPort"]
