"""Relation sync - diff-based tag assignment and SEO upsert."""

from .component import (
    RelationSyncComponent,
    diff_tags,
    seo_changes,
    validate_seo_fields,
)
from .models import SeoSyncResult, TagDiff, TagSyncResult

__all__ = [
    "RelationSyncComponent",
    "diff_tags",
    "seo_changes",
    "validate_seo_fields",
    "SeoSyncResult",
    "TagDiff",
    "TagSyncResult",
]
