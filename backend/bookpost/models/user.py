"""User ORM: account shared by the rental store and the social service.

Invariants:
    - email and username are unique and non-nullable
    - password_hash is a bcrypt hash, never the plain password
    - deposit is a non-negative integer balance (smallest currency unit)
    - jwt_token holds the most recently issued token (informational only)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from bookpost.db.base import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    full_name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    password_hash: Mapped[str] = mapped_column(String(100), nullable=False)
    age: Mapped[int | None] = mapped_column(Integer, nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    birth_date: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contact_no: Mapped[str | None] = mapped_column(String(30), nullable=True)
    deposit: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    jwt_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
