from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from editorial.domain.entities import (
    Category,
    Comment,
    CommentStatus,
    Media,
    Post,
    PostStatus,
    Profile,
    RoleType,
    SEOSettings,
    Tag,
)

# --- Posts ---


class PostCreateRequest(BaseModel):
    title: str
    content: str
    excerpt: str | None = None
    featured_image: str | None = None
    status: PostStatus = "draft"
    category_id: UUID | None = None
    scheduled_for: datetime | None = None
    tags: list[UUID] | None = None
    seo_settings: dict[str, Any] | None = None


class PostUpdateRequest(BaseModel):
    """Only fields present in the request body are applied."""

    title: str | None = None
    content: str | None = None
    excerpt: str | None = None
    featured_image: str | None = None
    status: PostStatus | None = None
    category_id: UUID | None = None
    scheduled_for: datetime | None = None
    tags: list[UUID] | None = None
    seo_settings: dict[str, Any] | None = None


class PostStatusRequest(BaseModel):
    status: PostStatus
    scheduled_for: datetime | None = None


class PostDetailResponse(BaseModel):
    post: Post
    category: Category | None = None
    author: Profile | None = None
    tags: list[Tag] = []
    seo_settings: SEOSettings | None = None


class PostListItem(Post):
    """A post with its category and author resolved."""

    category: Category | None = None
    author: Profile | None = None


class PostListResponse(BaseModel):
    items: list[PostListItem]
    total: int
    offset: int
    limit: int
    has_more: bool


class PublishDueErrorResponse(BaseModel):
    post_id: UUID
    code: str
    message: str


class PublishDueResponse(BaseModel):
    published: list[UUID]
    errors: list[PublishDueErrorResponse]


# --- Comments ---


class CommentCreateRequest(BaseModel):
    author_name: str
    author_email: str
    content: str
    parent_id: UUID | None = None


class CommentStatusRequest(BaseModel):
    status: CommentStatus


class CommentListResponse(BaseModel):
    items: list[Comment]
    total: int
    offset: int
    limit: int
    has_more: bool


class PublicCommentResponse(BaseModel):
    """Reader-visible comment. Email and network details stay private."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    parent_id: UUID | None
    author_name: str
    content: str
    created_at: datetime


class PublicThreadResponse(BaseModel):
    comment: PublicCommentResponse
    replies: list[PublicCommentResponse] = []


class CommentSubmittedResponse(BaseModel):
    id: UUID
    status: CommentStatus


# --- Public post ---


class PublicPostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    content: str
    excerpt: str | None
    featured_image: str | None
    published_at: datetime | None
    view_count: int
    like_count: int
    author_id: UUID


class PublicAuthorResponse(BaseModel):
    """Byline data. The profile email stays private."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    display_name: str | None
    avatar_url: str | None


class PublicPostListItem(PublicPostResponse):
    category: Category | None = None
    author: PublicAuthorResponse | None = None


class PublicPostDetailResponse(BaseModel):
    post: PublicPostResponse
    category: Category | None = None
    author: PublicAuthorResponse | None = None
    tags: list[Tag] = []
    seo_settings: SEOSettings | None = None
    comments: list[PublicThreadResponse] = []


class PublicPostListResponse(BaseModel):
    items: list[PublicPostListItem]
    total: int
    offset: int
    limit: int
    has_more: bool


# --- Taxonomy ---


class CategoryRequest(BaseModel):
    name: str
    description: str | None = None
    color: str | None = None


class CategoryUpdateRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    color: str | None = None


class CategoryWithCountResponse(BaseModel):
    category: Category
    post_count: int


class TagRequest(BaseModel):
    name: str


# --- Media ---


class MediaListResponse(BaseModel):
    items: list[Media]
    total: int
    offset: int
    limit: int
    has_more: bool


# --- Profiles ---


class ProfileCreateRequest(BaseModel):
    email: str
    display_name: str | None = None
    role: RoleType = "author"
    avatar_url: str | None = None
    id: UUID | None = Field(default=None, description="Identity assigned by the auth provider")


class ProfileUpdateRequest(BaseModel):
    display_name: str | None = None
    role: RoleType | None = None
    avatar_url: str | None = None