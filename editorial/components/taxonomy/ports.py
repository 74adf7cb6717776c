"""Taxonomy port definitions."""

from editorial.ports.clock import ClockPort
from editorial.ports.repo import CategoryRepoPort, TagRepoPort, UnitOfWorkPort

__all__ = ["CategoryRepoPort", "ClockPort", "TagRepoPort", "UnitOfWorkPort"]
