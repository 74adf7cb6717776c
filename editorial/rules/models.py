from pydantic import BaseModel, Field

from editorial.domain.entities import PostStatus


class ProjectRules(BaseModel):
    slug: str = "editorial-engine"
    rules_version: str = "1"


class SlugRules(BaseModel):
    max_length: int = Field(default=96, ge=8)
    fallback: str = "untitled"


def _default_status_machine() -> dict[PostStatus, list[PostStatus]]:
    return {
        "draft": ["published", "scheduled"],
        "scheduled": ["published", "draft"],
        "published": ["archived", "draft"],
        "archived": ["draft"],
    }


class PostRules(BaseModel):
    title_max_length: int = 200
    status_machine: dict[PostStatus, list[PostStatus]] = Field(
        default_factory=_default_status_machine
    )
    creatable_statuses: list[PostStatus] = Field(
        default_factory=lambda: ["draft", "published", "scheduled"]
    )


class PaginationRules(BaseModel):
    default_limit: int = Field(default=10, ge=1)
    max_limit: int = Field(default=100, ge=1)


class CommentRules(BaseModel):
    public_replies_require_approval: bool = True
    max_content_length: int = 5000


class MediaRules(BaseModel):
    max_upload_bytes: int = 10_000_000
    allowed_mime_prefixes: list[str] = Field(
        default_factory=lambda: ["image/", "video/", "audio/", "application/pdf"]
    )
    public_base_url: str = "/media"


class CategoryRules(BaseModel):
    default_color: str = "#3B82F6"


class Rules(BaseModel):
    project: ProjectRules = Field(default_factory=ProjectRules)
    slugs: SlugRules = Field(default_factory=SlugRules)
    posts: PostRules = Field(default_factory=PostRules)
    pagination: PaginationRules = Field(default_factory=PaginationRules)
    comments: CommentRules = Field(default_factory=CommentRules)
    media: MediaRules = Field(default_factory=MediaRules)
    categories: CategoryRules = Field(default_factory=CategoryRules)
