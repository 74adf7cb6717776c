"""Taxonomy input/output models."""

from __future__ import annotations

from dataclasses import dataclass

from editorial.domain.entities import Category


@dataclass(frozen=True)
class CreateCategoryInput:
    name: str
    description: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class UpdateCategoryInput:
    name: str | None = None
    description: str | None = None
    color: str | None = None


@dataclass(frozen=True)
class CategoryWithCount:
    category: Category
    post_count: int
