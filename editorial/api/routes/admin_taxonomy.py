"""Admin routes for categories and tags."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from editorial.api.deps import get_principal, get_taxonomy_component
from editorial.api.schemas import (
    CategoryRequest,
    CategoryUpdateRequest,
    CategoryWithCountResponse,
    TagRequest,
)
from editorial.components.taxonomy import (
    CreateCategoryInput,
    TaxonomyComponent,
    UpdateCategoryInput,
)
from editorial.domain.entities import Category, Tag

router = APIRouter(dependencies=[Depends(get_principal)])


# --- Categories ---


@router.get("/categories", response_model=list[CategoryWithCountResponse])
def list_categories(
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> list[CategoryWithCountResponse]:
    return [
        CategoryWithCountResponse(category=row.category, post_count=row.post_count)
        for row in taxonomy.list_categories()
    ]


@router.post("/categories", response_model=Category, status_code=201)
def create_category(
    data: CategoryRequest,
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> Category:
    return taxonomy.create_category(
        CreateCategoryInput(name=data.name, description=data.description, color=data.color)
    )


@router.patch("/categories/{category_id}", response_model=Category)
def update_category(
    category_id: UUID,
    data: CategoryUpdateRequest,
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> Category:
    return taxonomy.update_category(
        category_id,
        UpdateCategoryInput(name=data.name, description=data.description, color=data.color),
    )


@router.delete("/categories/{category_id}", status_code=204)
def delete_category(
    category_id: UUID,
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> Response:
    taxonomy.delete_category(category_id)
    return Response(status_code=204)


# --- Tags ---


@router.get("/tags", response_model=list[Tag])
def list_tags(taxonomy: TaxonomyComponent = Depends(get_taxonomy_component)) -> list[Tag]:
    return taxonomy.list_tags()


@router.post("/tags", response_model=Tag, status_code=201)
def create_tag(
    data: TagRequest,
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> Tag:
    return taxonomy.create_tag(data.name)


@router.patch("/tags/{tag_id}", response_model=Tag)
def update_tag(
    tag_id: UUID,
    data: TagRequest,
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> Tag:
    return taxonomy.update_tag(tag_id, data.name)


@router.delete("/tags/{tag_id}", status_code=204)
def delete_tag(
    tag_id: UUID,
    taxonomy: TaxonomyComponent = Depends(get_taxonomy_component),
) -> Response:
    taxonomy.delete_tag(tag_id)
    return Response(status_code=204)
