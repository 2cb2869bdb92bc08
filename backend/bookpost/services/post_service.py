"""Post Service: posts, comments, and the user activity log.

Invariants:
    - Every create/delete of a post or comment writes one UserActivityLog row in the same commit
    - Only the owner deletes a post; only the author deletes a comment
    - Empty post content is replaced by a joke before anything is written
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bookpost.core.domain_types import PostId
from bookpost.core.errors import (
    BadRequestError, ResourceNotFoundError, UnauthorizedError,
)
from bookpost.core.post_rules import (
    describe_comment_created, describe_comment_deleted,
    describe_post_created, describe_post_deleted, is_valid_image_url,
)
from bookpost.infrastructure.joke_client import JokeClient
from bookpost.models.comment import Comment
from bookpost.models.post import Post
from bookpost.models.user_activity_log import UserActivityLog
from bookpost.schemas.post import (
    CommentCreate, CommentResponse, PostCreate, PostResponse,
)

logger = logging.getLogger(__name__)


class PostService:
    """Social posting operations."""

    def __init__(self, db: AsyncSession, joke_client: JokeClient | None = None):
        self.db = db
        self.joke_client = joke_client

    # ─── Posts ───────────────────────────────────────────────────

    async def create_post(self, user_id: int, body: PostCreate) -> Post:
        if not is_valid_image_url(body.image_url):
            raise BadRequestError("Invalid image URL")

        content = body.content
        if not content or not content.strip():
            if self.joke_client is None:
                raise RuntimeError("Joke client not configured")
            content = await self.joke_client.random_joke()

        post = Post(user_id=user_id, content=content, image_url=body.image_url)
        self.db.add(post)
        await self.db.flush()
        self._log_activity(user_id, describe_post_created(post.id))
        await self.db.commit()
        return post

    async def list_posts(self) -> list[Post]:
        result = await self.db.execute(select(Post).order_by(Post.id))
        return list(result.scalars().all())

    async def get_post(self, post_id: PostId) -> Post:
        """Post with its comments loaded."""
        post = await self.db.get(Post, post_id)
        if not post:
            raise ResourceNotFoundError("Post", post_id)
        return post

    async def delete_post(self, user_id: int, post_id: int) -> PostResponse:
        """Delete an owned post and its comments; returns the deleted post."""
        post = await self.get_post(post_id)
        if post.user_id != user_id:
            raise UnauthorizedError("You are not authorized to delete this post")

        deleted = PostResponse.model_validate(post)
        await self.db.delete(post)
        self._log_activity(user_id, describe_post_deleted(post_id))
        await self.db.commit()
        return deleted

    # ─── Comments ────────────────────────────────────────────────

    async def create_comment(self, user_id: int, body: CommentCreate) -> Comment:
        if not await self.db.get(Post, body.post_id):
            raise ResourceNotFoundError("Post", body.post_id)

        comment = Comment(
            author_id=user_id, post_id=body.post_id, content=body.content,
        )
        self.db.add(comment)
        self._log_activity(user_id, describe_comment_created(body.post_id))
        await self.db.commit()
        return comment

    async def get_comment(self, comment_id: int) -> Comment:
        """Comment with its post and author loaded."""
        result = await self.db.execute(
            select(Comment)
            .options(selectinload(Comment.post), selectinload(Comment.author))
            .where(Comment.id == comment_id),
        )
        comment = result.scalar_one_or_none()
        if not comment:
            raise ResourceNotFoundError("Comment", comment_id)
        return comment

    async def delete_comment(self, user_id: int, comment_id: int) -> CommentResponse:
        """Delete an authored comment; returns the deleted comment."""
        comment = await self.db.get(Comment, comment_id)
        if not comment:
            raise ResourceNotFoundError("Comment", comment_id)
        if comment.author_id != user_id:
            raise UnauthorizedError("You are not authorized to delete this comment")

        deleted = CommentResponse.model_validate(comment)
        await self.db.delete(comment)
        self._log_activity(user_id, describe_comment_deleted(deleted.post_id))
        await self.db.commit()
        return deleted

    # ─── Activity log ────────────────────────────────────────────

    async def list_activities(self, user_id: int) -> list[UserActivityLog]:
        result = await self.db.execute(
            select(UserActivityLog)
            .where(UserActivityLog.user_id == user_id)
            .order_by(UserActivityLog.id),
        )
        return list(result.scalars().all())

    def _log_activity(self, user_id: int, description: str) -> None:
        self.db.add(UserActivityLog(user_id=user_id, description=description))
        logger.info(description, extra={"user_id": user_id})
