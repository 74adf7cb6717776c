"""
Taxonomy component - category and tag CRUD.

Names slugify into unique slugs. Unlike posts, a taken slug is a
ConflictError rather than a disambiguated suffix: two categories named
alike are a duplicate, not two articles on the same topic.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from uuid import UUID

from editorial.components.slugs import slugify
from editorial.domain.entities import Category, Tag
from editorial.domain.errors import ConflictError, InvalidInputError, NotFoundError
from editorial.rules.loader import default_rules
from editorial.rules.models import Rules

from .models import CategoryWithCount, CreateCategoryInput, UpdateCategoryInput
from .ports import ClockPort, UnitOfWorkPort

logger = logging.getLogger(__name__)

_HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


def _name_and_slug(name: str | None, max_length: int) -> tuple[str, str]:
    if not isinstance(name, str) or not name.strip():
        raise InvalidInputError("name is required", field="name")
    slug = slugify(name, max_length)
    if not slug:
        raise InvalidInputError("name must contain letters or digits", field="name")
    return name.strip(), slug


def _check_color(color: str) -> str:
    if not _HEX_COLOR.match(color):
        raise InvalidInputError("color must be a #RRGGBB hex value", field="color")
    return color


class TaxonomyComponent:
    """Simple slug-unique CRUD for categories and tags."""

    def __init__(self, uow: UnitOfWorkPort, clock: ClockPort, rules: Rules | None = None) -> None:
        self._uow = uow
        self._clock = clock
        self._rules = rules or default_rules()

    # --- Categories ---

    def create_category(self, inp: CreateCategoryInput) -> Category:
        name, slug = _name_and_slug(inp.name, self._rules.slugs.max_length)
        color = _check_color(inp.color or self._rules.categories.default_color)
        with self._uow as uow:
            if uow.categories.slug_exists(slug):
                raise ConflictError(f"Category slug '{slug}' already exists")
            category = Category(
                name=name,
                slug=slug,
                description=inp.description,
                color=color,
                created_at=self._clock.now_utc(),
            )
            uow.categories.insert(category)
            uow.commit()
        logger.info("Created category %s (%s)", category.id, slug)
        return category

    def update_category(self, category_id: UUID, inp: UpdateCategoryInput) -> Category:
        with self._uow as uow:
            category = uow.categories.get_by_id(category_id)
            if category is None:
                raise NotFoundError("Category", category_id)

            updates: dict[str, object] = {}
            if inp.name is not None:
                name, slug = _name_and_slug(inp.name, self._rules.slugs.max_length)
                if uow.categories.slug_exists(slug, exclude_id=category_id):
                    raise ConflictError(f"Category slug '{slug}' already exists")
                updates.update(name=name, slug=slug)
            if inp.description is not None:
                updates["description"] = inp.description
            if inp.color is not None:
                updates["color"] = _check_color(inp.color)

            updated = category.model_copy(update=updates)
            if updates:
                uow.categories.update(updated)
                uow.commit()
        return updated

    def delete_category(self, category_id: UUID) -> None:
        """Delete a category; its posts keep existing with no category."""
        with self._uow as uow:
            if uow.categories.get_by_id(category_id) is None:
                raise NotFoundError("Category", category_id)
            detached = uow.posts.clear_category(category_id)
            uow.categories.delete(category_id)
            uow.commit()
        logger.info("Deleted category %s (%d posts detached)", category_id, detached)

    def get_category(self, category_id: UUID) -> Category:
        with self._uow as uow:
            category = uow.categories.get_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)
        return category

    def categories_by_id(self, category_ids: Iterable[UUID]) -> dict[UUID, Category]:
        with self._uow as uow:
            found = uow.categories.get_many(category_ids)
        return {c.id: c for c in found}

    def list_categories(self) -> list[CategoryWithCount]:
        with self._uow as uow:
            rows = uow.categories.list_with_counts()
        return [CategoryWithCount(category=c, post_count=n) for c, n in rows]

    # --- Tags ---

    def create_tag(self, name: str) -> Tag:
        name, slug = _name_and_slug(name, self._rules.slugs.max_length)
        with self._uow as uow:
            if uow.tags.slug_exists(slug):
                raise ConflictError(f"Tag slug '{slug}' already exists")
            tag = Tag(name=name, slug=slug, created_at=self._clock.now_utc())
            uow.tags.insert(tag)
            uow.commit()
        logger.info("Created tag %s (%s)", tag.id, slug)
        return tag

    def update_tag(self, tag_id: UUID, name: str) -> Tag:
        name, slug = _name_and_slug(name, self._rules.slugs.max_length)
        with self._uow as uow:
            tag = uow.tags.get_by_id(tag_id)
            if tag is None:
                raise NotFoundError("Tag", tag_id)
            if uow.tags.slug_exists(slug, exclude_id=tag_id):
                raise ConflictError(f"Tag slug '{slug}' already exists")
            updated = tag.model_copy(update={"name": name, "slug": slug})
            uow.tags.update(updated)
            uow.commit()
        return updated

    def delete_tag(self, tag_id: UUID) -> None:
        """Delete a tag and every post assignment of it."""
        with self._uow as uow:
            if uow.tags.get_by_id(tag_id) is None:
                raise NotFoundError("Tag", tag_id)
            uow.post_tags.delete_for_tag(tag_id)
            uow.tags.delete(tag_id)
            uow.commit()
        logger.info("Deleted tag %s", tag_id)

    def list_tags(self) -> list[Tag]:
        with self._uow as uow:
            return uow.tags.list_all()
