"""Activity Routes: the caller's post/comment audit trail."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id
from bookpost.infrastructure.database import get_db
from bookpost.schemas.post import ActivityResponse
from bookpost.services.post_service import PostService

router = APIRouter(prefix="/activities", tags=["activities"])


@router.get("", response_model=list[ActivityResponse])
async def get_user_activities(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    activities = await PostService(db).list_activities(user_id)
    return [ActivityResponse.model_validate(a) for a in activities]
