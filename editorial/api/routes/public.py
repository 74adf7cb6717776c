"""
Public (reader) routes.

Only published posts are visible. Any lookup miss, including a post that
exists but is not published, answers with the same generic 404 so the
response never reveals unpublished content.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request

from editorial.api.deps import (
    get_comment_component,
    get_post_component,
    get_profile_component,
    get_relations,
    get_taxonomy_component,
)
from editorial.api.errors import PUBLIC_NOT_FOUND
from editorial.api.lookups import author_of, authors_for, categories_for
from editorial.api.schemas import (
    CategoryWithCountResponse,
    CommentCreateRequest,
    CommentSubmittedResponse,
    PublicAuthorResponse,
    PublicCommentResponse,
    PublicPostDetailResponse,
    PublicPostListItem,
    PublicPostListResponse,
    PublicPostResponse,
    PublicThreadResponse,
)
from editorial.components.comments import CommentComponent, CreateCommentInput
from editorial.components.posts import PostComponent
from editorial.components.profiles import ProfileComponent
from editorial.components.query import PostFilter
from editorial.components.relations import RelationSyncComponent
from editorial.components.taxonomy import TaxonomyComponent
from editorial.domain.entities import Profile, Tag
from editorial.domain.errors import InvalidInputError, NotFoundError

router = APIRouter()


def _byline(profile: Profile | None) -> PublicAuthorResponse | None:
    return PublicAuthorResponse.model_validate(profile) if profile else None


@contextmanager
def content_or_404() -> Iterator[None]:
    try:
        yield
    except (NotFoundError, InvalidInputError) as e:
        raise HTTPException(status_code=404, detail=PUBLIC_NOT_FOUND) from e


@router.get("/posts", response_model=PublicPostListResponse)
def list_published_posts(
    category_id: UUID | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int | None = None,
    posts: PostComponent = Depends(get_post_component),
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
    profiles: ProfileComponent = Depends(get_profile_component),
) -> PublicPostListResponse:
    with content_or_404():
        page = posts.list_published(
            PostFilter(category_id=category_id, search=search, offset=offset, limit=limit)
        )
    categories = categories_for(page.items, taxonomy)
    authors = authors_for(page.items, profiles)
    return PublicPostListResponse(
        items=[
            PublicPostListItem(
                **PublicPostResponse.model_validate(p).model_dump(),
                category=categories.get(p.category_id) if p.category_id else None,
                author=_byline(authors.get(p.author_id)),
            )
            for p in page.items
        ],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_more=page.has_more,
    )


@router.get("/posts/{slug}", response_model=PublicPostDetailResponse)
def get_published_post(
    slug: str,
    posts: PostComponent = Depends(get_post_component),
    relations: RelationSyncComponent = Depends(get_relations),
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
    comments: CommentComponent = Depends(get_comment_component),
    profiles: ProfileComponent = Depends(get_profile_component),
) -> PublicPostDetailResponse:
    """Post page payload. Each successful fetch counts one view."""
    with content_or_404():
        post = posts.get_by_slug(slug)

    threads = comments.list_for_post(post.id, only_approved=True)
    return PublicPostDetailResponse(
        post=PublicPostResponse.model_validate(post),
        category=taxonomy.get_category(post.category_id) if post.category_id else None,
        author=_byline(author_of(post, profiles)),
        tags=relations.tags_for_post(post.id),
        seo_settings=relations.seo_for_post(post.id),
        comments=[
            PublicThreadResponse(
                comment=PublicCommentResponse.model_validate(t.comment),
                replies=[PublicCommentResponse.model_validate(r) for r in t.replies],
            )
            for t in threads
        ],
    )


@router.post("/posts/{slug}/comments", response_model=CommentSubmittedResponse, status_code=202)
def submit_comment(
    slug: str,
    data: CommentCreateRequest,
    request: Request,
    posts: PostComponent = Depends(get_post_component),
    comments: CommentComponent = Depends(get_comment_component),
) -> CommentSubmittedResponse:
    """Queue a reader comment for moderation."""
    with content_or_404():
        post = posts.get_by_slug(slug, include_unpublished=True)
        if post.status != "published":
            raise NotFoundError("Post", slug)

    try:
        comment = comments.create(
            CreateCommentInput(
                post_id=post.id,
                author_name=data.author_name,
                author_email=data.author_email,
                content=data.content,
                parent_id=data.parent_id,
                ip_address=request.client.host if request.client else None,
                user_agent=request.headers.get("user-agent"),
            )
        )
    except InvalidInputError as e:
        if e.field in ("post_id", "parent_id"):
            raise HTTPException(status_code=404, detail=PUBLIC_NOT_FOUND) from e
        raise
    return CommentSubmittedResponse(id=comment.id, status=comment.status)


@router.get("/categories", response_model=list[CategoryWithCountResponse])
def list_public_categories(
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> list[CategoryWithCountResponse]:
    return [
        CategoryWithCountResponse(category=row.category, post_count=row.post_count)
        for row in taxonomy.list_categories()
    ]


@router.get("/tags", response_model=list[Tag])
def list_public_tags(taxonomy: TaxonomyComponent = Depends(get_taxonomy_component)) -> list[Tag]:
    return taxonomy.list_tags()
