"""Comment Routes: create, fetch, delete."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id
from bookpost.infrastructure.database import get_db
from bookpost.schemas.post import (
    CommentCreate, CommentDetailResponse, CommentEnvelope, CommentResponse,
)
from bookpost.services.post_service import PostService

router = APIRouter(prefix="/comments", tags=["comments"])


@router.post(
    "", response_model=CommentEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    body: CommentCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    comment = await PostService(db).create_comment(user_id, body)
    return CommentEnvelope(
        message="Comment created successfully",
        comment=CommentResponse.model_validate(comment),
    )


@router.get(
    "/{comment_id}", response_model=CommentDetailResponse,
    dependencies=[Depends(get_current_user_id)],
)
async def get_comment_by_id(
    comment_id: int = Path(..., gt=0), db: AsyncSession = Depends(get_db),
):
    """Comment with its post and author."""
    comment = await PostService(db).get_comment(comment_id)
    return CommentDetailResponse.from_model(comment)


@router.delete("/{comment_id}", response_model=CommentEnvelope)
async def delete_comment_by_id(
    comment_id: int = Path(..., gt=0),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Only the author may delete a comment."""
    deleted = await PostService(db).delete_comment(user_id, comment_id)
    return CommentEnvelope(message="Comment deleted successfully", comment=deleted)
