"""Post & Comment Schemas: bodies, views, and message envelopes.

Invariants:
    - PostCreate.content may be empty or missing (joke fallback), never longer than 10000 chars
    - CommentCreate.content is stripped and non-empty
    - image_url format is checked in the service (needs the exact error message)
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from bookpost.schemas.user import UserSummary


class PostCreate(BaseModel):
    content: str | None = Field(None, max_length=10_000)
    image_url: str = Field(max_length=1000)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    author_id: int
    post_id: int
    content: str
    created_at: datetime


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    content: str
    image_url: str
    created_at: datetime


class PostDetailResponse(PostResponse):
    comments: list[CommentResponse] = []


class PostEnvelope(BaseModel):
    message: str
    post: PostResponse


class CommentCreate(BaseModel):
    content: str = Field(min_length=1, max_length=5000)
    post_id: int = Field(gt=0)

    @field_validator("content")
    @classmethod
    def strip_content(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("content cannot be empty or whitespace")
        return v


class CommentDetailResponse(CommentResponse):
    post: PostResponse
    author: UserSummary

    @classmethod
    def from_model(cls, comment) -> "CommentDetailResponse":
        return cls(
            id=comment.id,
            author_id=comment.author_id,
            post_id=comment.post_id,
            content=comment.content,
            created_at=comment.created_at,
            post=PostResponse.model_validate(comment.post),
            author=UserSummary.from_model(comment.author),
        )


class CommentEnvelope(BaseModel):
    message: str
    comment: CommentResponse


class ActivityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    description: str
    created_at: datetime
