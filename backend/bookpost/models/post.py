"""Post ORM: a user's social post.

Invariants:
    - Always belongs to a User (user_id FK)
    - content is never empty once stored (joke fallback fills it)
    - Deleting a post deletes its comments (ORM and FK cascade)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookpost.db.base import Base


class Post(Base):
    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    comments: Mapped[list["Comment"]] = relationship(
        "Comment", back_populates="post",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="Comment.id",
    )
