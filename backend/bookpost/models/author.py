"""Author ORM."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from bookpost.db.base import Base


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
