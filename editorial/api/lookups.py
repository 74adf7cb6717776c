"""Batch lookups that resolve a page of posts to their categories and authors."""

from collections.abc import Sequence
from uuid import UUID

from editorial.components.profiles import ProfileComponent
from editorial.components.taxonomy import TaxonomyComponent
from editorial.domain.entities import Category, Post, Profile


def categories_for(
    posts: Sequence[Post], taxonomy: TaxonomyComponent
) -> dict[UUID, Category]:
    ids = [p.category_id for p in posts if p.category_id is not None]
    return taxonomy.categories_by_id(ids) if ids else {}


def authors_for(posts: Sequence[Post], profiles: ProfileComponent) -> dict[UUID, Profile]:
    """Profiles for the post authors. Authors without a profile are absent."""
    return profiles.get_many(p.author_id for p in posts) if posts else {}


def author_of(post: Post, profiles: ProfileComponent) -> Profile | None:
    return authors_for([post], profiles).get(post.author_id)
