"""Taxonomy - categories and tags."""

from .component import TaxonomyComponent
from .models import CategoryWithCount, CreateCategoryInput, UpdateCategoryInput

__all__ = [
    "TaxonomyComponent",
    "CategoryWithCount",
    "CreateCategoryInput",
    "UpdateCategoryInput",
]
