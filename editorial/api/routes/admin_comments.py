"""Admin routes for comment moderation."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response

from editorial.api.deps import get_comment_component, get_principal
from editorial.api.schemas import CommentListResponse, CommentStatusRequest
from editorial.components.comments import CommentComponent
from editorial.components.query import CommentFilter
from editorial.domain.entities import Comment, CommentStatus, CommentThread

router = APIRouter(dependencies=[Depends(get_principal)])


@router.get("/comments", response_model=CommentListResponse)
def list_comments(
    post_id: UUID | None = None,
    status: CommentStatus | None = None,
    offset: int = 0,
    limit: int | None = None,
    comments: CommentComponent = Depends(get_comment_component),
) -> CommentListResponse:
    """Moderation queue: root comments across posts, newest first."""
    page = comments.list(
        CommentFilter(post_id=post_id, status=status, offset=offset, limit=limit)
    )
    return CommentListResponse(
        items=page.items,
        total=page.total,
        offset=page.offset,
        limit=page.limit,
        has_more=page.has_more,
    )


@router.get("/posts/{post_id}/comments", response_model=list[CommentThread])
def list_post_comments(
    post_id: UUID,
    comments: CommentComponent = Depends(get_comment_component),
) -> list[CommentThread]:
    """Every thread on a post regardless of moderation status."""
    return comments.list_for_post(post_id, only_approved=False)


@router.patch("/comments/{comment_id}", response_model=Comment)
def moderate_comment(
    comment_id: UUID,
    data: CommentStatusRequest,
    comments: CommentComponent = Depends(get_comment_component),
) -> Comment:
    return comments.set_status(comment_id, data.status)


@router.delete("/comments/{comment_id}", status_code=204)
def delete_comment(
    comment_id: UUID,
    comments: CommentComponent = Depends(get_comment_component),
) -> Response:
    comments.delete(comment_id)
    return Response(status_code=204)
