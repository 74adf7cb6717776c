"""
Slug resolver - derives URL-safe, unique identifiers from free text.

slugify() is pure. resolve_unique() consults an existence predicate and
appends a numeric suffix when the candidate is taken. The predicate is a
pre-check only; the store's UNIQUE constraint remains the source of truth.
"""

from __future__ import annotations

import logging
import re
import time

from .ports import SlugExistsPort, SuffixSourcePort

logger = logging.getLogger(__name__)

_DISALLOWED = re.compile(r"[^a-z0-9\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s-]+")
_VALID_SLUG = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def slugify(text: str, max_length: int | None = None) -> str:
    """
    Lowercase, drop characters outside [a-z0-9, whitespace, hyphen],
    collapse whitespace/hyphen runs to one hyphen, trim edge hyphens.

    >>> slugify("Derby Day Recap!")
    'derby-day-recap'
    """
    slug = _DISALLOWED.sub("", text.lower())
    slug = _SEPARATOR_RUNS.sub("-", slug).strip("-")
    if max_length is not None and len(slug) > max_length:
        slug = slug[:max_length].rstrip("-")
    return slug


def is_valid_slug(slug: str) -> bool:
    """Check if slug is valid (lowercase alphanumeric + single hyphens)."""
    return bool(_VALID_SLUG.match(slug))


def millisecond_suffix() -> int:
    """Default suffix source: wall clock in milliseconds."""
    return time.time_ns() // 1_000_000


def resolve_unique(
    candidate: str,
    exists: SlugExistsPort,
    *,
    suffix_source: SuffixSourcePort = millisecond_suffix,
) -> str:
    """
    Return `candidate` if free, else `candidate-<suffix>`.

    The suffix is bumped until the predicate reports it free, so the
    result is unique under single-writer semantics. Exceptions raised by
    `exists` propagate: a failed check must never be read as "free".
    """
    if not exists(candidate):
        return candidate

    suffix = suffix_source()
    composite = f"{candidate}-{suffix}"
    while exists(composite):
        suffix += 1
        composite = f"{candidate}-{suffix}"

    logger.debug("Slug %r taken, disambiguated to %r", candidate, composite)
    return composite


class SlugResolver:
    """Slugify + resolve_unique bound to configured length and fallback."""

    def __init__(
        self,
        max_length: int = 96,
        fallback: str = "untitled",
        suffix_source: SuffixSourcePort = millisecond_suffix,
    ) -> None:
        self._max_length = max_length
        self._fallback = fallback
        self._suffix_source = suffix_source

    def slugify(self, text: str) -> str:
        return slugify(text, self._max_length) or self._fallback

    def resolve(self, text: str, exists: SlugExistsPort) -> str:
        """Slugify `text` and make it unique against `exists`."""
        return resolve_unique(self.slugify(text), exists, suffix_source=self._suffix_source)
