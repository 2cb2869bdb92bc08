"""Post Routes: create, list, fetch, delete."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id, get_joke_client
from bookpost.infrastructure.database import get_db
from bookpost.infrastructure.joke_client import JokeClient
from bookpost.schemas.post import (
    PostCreate, PostDetailResponse, PostEnvelope, PostResponse,
)
from bookpost.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post(
    "", response_model=PostEnvelope, status_code=status.HTTP_201_CREATED,
)
async def create_post(
    body: PostCreate,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    joke_client: JokeClient = Depends(get_joke_client),
):
    """Create a post. Empty content is replaced by a random joke."""
    post = await PostService(db, joke_client).create_post(user_id, body)
    return PostEnvelope(
        message="Post created successfully",
        post=PostResponse.model_validate(post),
    )


@router.get(
    "", response_model=list[PostResponse],
    dependencies=[Depends(get_current_user_id)],
)
async def get_all_posts(db: AsyncSession = Depends(get_db)):
    posts = await PostService(db).list_posts()
    return [PostResponse.model_validate(post) for post in posts]


@router.get(
    "/{post_id}", response_model=PostDetailResponse,
    dependencies=[Depends(get_current_user_id)],
)
async def get_post_by_id(
    post_id: int = Path(..., gt=0), db: AsyncSession = Depends(get_db),
):
    """Post with its comments."""
    post = await PostService(db).get_post(post_id)
    return PostDetailResponse.model_validate(post)


@router.delete("/{post_id}", response_model=PostEnvelope)
async def delete_post_by_id(
    post_id: int = Path(..., gt=0),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Only the owner may delete a post."""
    deleted = await PostService(db).delete_post(user_id, post_id)
    return PostEnvelope(message="Post deleted successfully", post=deleted)
