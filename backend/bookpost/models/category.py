"""Category ORM."""

from sqlalchemy import String, Integer
from sqlalchemy.orm import Mapped, mapped_column

from bookpost.db.base import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
