"""Book ORM: a rentable title with a flat price.

Invariants:
    - Always references one Author and one Category
    - price is a non-negative integer (smallest currency unit)

Design Decisions:
    - author/category loaded with selectin: every book response renders both
"""

from sqlalchemy import String, Integer, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookpost.db.base import Base


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("authors.id"), nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False,
    )

    author: Mapped["Author"] = relationship("Author", lazy="selectin")
    category: Mapped["Category"] = relationship("Category", lazy="selectin")
