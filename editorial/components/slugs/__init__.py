"""Slug resolver - URL-safe unique identifiers from free text."""

from .component import (
    SlugResolver,
    is_valid_slug,
    millisecond_suffix,
    resolve_unique,
    slugify,
)
from .ports import SlugExistsPort, SuffixSourcePort

__all__ = [
    "SlugResolver",
    "is_valid_slug",
    "millisecond_suffix",
    "resolve_unique",
    "slugify",
    "SlugExistsPort",
    "SuffixSourcePort",
]
