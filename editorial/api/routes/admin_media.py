"""Admin routes for the media library."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from editorial.api.deps import get_media_component, get_principal
from editorial.api.schemas import MediaListResponse
from editorial.components.media import MediaComponent, UploadMediaInput
from editorial.components.query import MediaFilter
from editorial.domain.entities import Media, Principal

router = APIRouter(dependencies=[Depends(get_principal)])


@router.get("/media", response_model=MediaListResponse)
def list_media(
    uploaded_by: UUID | None = None,
    file_type: str | None = None,
    offset: int = 0,
    limit: int | None = None,
    media: MediaComponent = Depends(get_media_component),
) -> MediaListResponse:
    page = media.list(
        MediaFilter(uploaded_by=uploaded_by, file_type=file_type, offset=offset, limit=limit)
    )
    return MediaListResponse(
        items=page.items,
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_more=page.has_more,
    )


@router.post("/media", response_model=Media, status_code=201)
def upload_media(
    file: UploadFile = File(...),
    alt_text: str | None = Form(default=None),
    caption: str | None = Form(default=None),
    principal: Principal = Depends(get_principal),
    media: MediaComponent = Depends(get_media_component),
) -> Media:
    """Upload a file into the blob store and record it in the library."""
    return media.upload(
        UploadMediaInput(
            original_name=file.filename or "unnamed",
            data=file.file.read(),
            file_type=file.content_type or "application/octet-stream",
            alt_text=alt_text,
            caption=caption,
        ),
        principal,
    )


@router.get("/media/{media_id}", response_model=Media)
def get_media(media_id: UUID, media: MediaComponent = Depends(get_media_component)) -> Media:
    return media.get(media_id)


@router.delete("/media/{media_id}", status_code=204)
def delete_media(
    media_id: UUID,
    media: MediaComponent = Depends(get_media_component),
) -> Response:
    media.delete(media_id)
    return Response(status_code=204)
