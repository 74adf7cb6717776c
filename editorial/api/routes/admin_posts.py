"""Admin routes for the post lifecycle."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from editorial.api.deps import (
    get_post_component,
    get_principal,
    get_profile_component,
    get_relations,
    get_taxonomy_component,
)
from editorial.api.lookups import author_of, authors_for, categories_for
from editorial.api.schemas import (
    PostCreateRequest,
    PostDetailResponse,
    PostListItem,
    PostListResponse,
    PostStatusRequest,
    PostUpdateRequest,
    PublishDueErrorResponse,
    PublishDueResponse,
)
from editorial.components.posts import CreatePostInput, PostComponent, UpdatePostInput
from editorial.components.profiles import ProfileComponent
from editorial.components.query import PostFilter
from editorial.components.relations import RelationSyncComponent
from editorial.components.taxonomy import TaxonomyComponent
from editorial.domain.entities import Post, PostStatus, Principal

router = APIRouter(dependencies=[Depends(get_principal)])


@router.get("/posts", response_model=PostListResponse)
def list_posts(
    status: PostStatus | None = None,
    category_id: UUID | None = None,
    author_id: UUID | None = None,
    search: str | None = None,
    offset: int = 0,
    limit: int | None = None,
    posts: PostComponent = Depends(get_post_component),
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
    profiles: ProfileComponent = Depends(get_profile_component),
) -> PostListResponse:
    """List posts in any status, newest first, with category and author resolved."""
    page = posts.list(
        PostFilter(
            status=status,
            category_id=category_id,
            author_id=author_id,
            search=search,
            offset=offset,
            limit=limit,
        )
    )
    categories = categories_for(page.items, taxonomy)
    authors = authors_for(page.items, profiles)
    return PostListResponse(
        items=[
            PostListItem(
                **p.model_dump(),
                category=categories.get(p.category_id) if p.category_id else None,
                author=authors.get(p.author_id),
            )
            for p in page.items
        ],
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_more=page.has_more,
    )


@router.post("/posts", response_model=Post, status_code=201)
def create_post(
    data: PostCreateRequest,
    principal: Principal = Depends(get_principal),
    posts: PostComponent = Depends(get_post_component),
) -> Post:
    return posts.create(
        CreatePostInput(
            title=data.title,
            content=data.content,
            excerpt=data.excerpt,
            featured_image=data.featured_image,
            status=data.status,
            category_id=data.category_id,
            scheduled_for=data.scheduled_for,
            tags=tuple(data.tags) if data.tags is not None else None,
            seo_settings=data.seo_settings,
        ),
        principal,
    )


@router.post("/posts/publish-due", response_model=PublishDueResponse)
def publish_due(posts: PostComponent = Depends(get_post_component)) -> PublishDueResponse:
    """Publish every scheduled post whose time has come."""
    result = posts.publish_due()
    return PublishDueResponse(
        published=result.published,
        errors=[
            PublishDueErrorResponse(post_id=e.post_id, code=e.code, message=e.message)
            for e in result.errors
        ],
    )


@router.get("/posts/{post_id}", response_model=PostDetailResponse)
def get_post(
    post_id: UUID,
    posts: PostComponent = Depends(get_post_component),
    relations: RelationSyncComponent = Depends(get_relations),
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
    profiles: ProfileComponent = Depends(get_profile_component),
) -> PostDetailResponse:
    post = posts.get(post_id)
    return PostDetailResponse(
        post=post,
        category=taxonomy.get_category(post.category_id) if post.category_id else None,
        author=author_of(post, profiles),
        tags=relations.tags_for_post(post.id),
        seo_settings=relations.seo_for_post(post.id),
    )


@router.patch("/posts/{post_id}", response_model=Post)
def update_post(
    post_id: UUID,
    data: PostUpdateRequest,
    posts: PostComponent = Depends(get_post_component),
) -> Post:
    changes = data.model_dump(exclude_unset=True)
    tags = changes.pop("tags", None)
    seo_settings = changes.pop("seo_settings", None)
    return posts.update(
        post_id,
        UpdatePostInput(
            changes=changes,
            tags=tuple(tags) if tags is not None else None,
            seo_settings=seo_settings,
        ),
    )


@router.post("/posts/{post_id}/status", response_model=Post)
def set_post_status(
    post_id: UUID,
    data: PostStatusRequest,
    posts: PostComponent = Depends(get_post_component),
) -> Post:
    return posts.set_status(post_id, data.status, data.scheduled_for)


@router.delete("/posts/{post_id}", status_code=204)
def delete_post(
    post_id: UUID,
    posts: PostComponent = Depends(get_post_component),
) -> Response:
    posts.delete(post_id)
    return Response(status_code=204)
