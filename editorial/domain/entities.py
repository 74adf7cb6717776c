from datetime import UTC, datetime
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(UTC)


# --- Enums / Literals ---
RoleType = Literal["admin", "editor", "author"]
PostStatus = Literal["draft", "published", "scheduled", "archived"]
CommentStatus = Literal["pending", "approved", "spam", "trash"]

POST_STATUSES: tuple[PostStatus, ...] = ("draft", "published", "scheduled", "archived")
COMMENT_STATUSES: tuple[CommentStatus, ...] = ("pending", "approved", "spam", "trash")


# --- Caller context ---

class Principal(BaseModel):
    """Authenticated caller as supplied by the auth collaborator.

    Used for ownership stamping only; authorization happens upstream.
    """

    id: UUID
    role: RoleType


class Profile(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    email: str
    display_name: str | None = None
    avatar_url: str | None = None
    role: RoleType = "author"
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


# --- Taxonomy ---

class Category(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    slug: str
    description: str | None = None
    color: str = "#3B82F6"
    created_at: datetime = Field(default_factory=_utcnow)


class Tag(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    name: str
    slug: str
    created_at: datetime = Field(default_factory=_utcnow)


# --- Posts ---

class Post(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    title: str
    slug: str
    content: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: PostStatus = "draft"

    category_id: UUID | None = None
    author_id: UUID

    published_at: datetime | None = None
    scheduled_for: datetime | None = None

    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)

    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class PostTag(BaseModel):
    post_id: UUID
    tag_id: UUID


class SEOSettings(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    post_id: UUID
    meta_title: str | None = None
    meta_description: str | None = None
    keywords: str | None = None
    og_title: str | None = None
    og_description: str | None = None
    og_image: str | None = None
    twitter_title: str | None = None
    twitter_description: str | None = None
    twitter_image: str | None = None
    canonical_url: str | None = None
    robots_meta: str | None = "index,follow"
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


# Fields a caller may override through Relation Sync.
SEO_FIELDS: tuple[str, ...] = (
    "meta_title",
    "meta_description",
    "keywords",
    "og_title",
    "og_description",
    "og_image",
    "twitter_title",
    "twitter_description",
    "twitter_image",
    "canonical_url",
    "robots_meta",
)


# --- Comments ---

class Comment(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    post_id: UUID
    parent_id: UUID | None = None
    author_name: str
    author_email: str
    content: str
    status: CommentStatus = "pending"
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None


class CommentThread(BaseModel):
    """A root comment with its (depth-1) replies attached, oldest reply first."""

    comment: Comment
    replies: list[Comment] = Field(default_factory=list)


# --- Media ---

class Media(BaseModel):
    id: UUID = Field(default_factory=uuid4)
    file_name: str  # object key inside the blob store
    original_name: str
    file_url: str
    file_type: str
    file_size: int = Field(ge=0)
    alt_text: str | None = None
    caption: str | None = None
    uploaded_by: UUID | None = None
    created_at: datetime = Field(default_factory=_utcnow)
