"""Relation sync component port definitions."""

from editorial.ports.clock import ClockPort
from editorial.ports.repo import (
    PostRepoPort,
    PostTagRepoPort,
    SeoRepoPort,
    TagRepoPort,
    UnitOfWorkPort,
)

__all__ = [
    "ClockPort",
    "PostRepoPort",
    "PostTagRepoPort",
    "SeoRepoPort",
    "TagRepoPort",
    "UnitOfWorkPort",
]
