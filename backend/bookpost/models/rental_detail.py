"""RentalDetail ORM: one rented book inside a Rental."""

from sqlalchemy import Integer, Boolean, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookpost.db.base import Base


class RentalDetail(Base):
    __tablename__ = "rental_details"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rental_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rentals.id", ondelete="CASCADE"), nullable=False,
    )
    book_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("books.id"), nullable=False,
    )
    returned: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    rental: Mapped["Rental"] = relationship("Rental", back_populates="details")
    book: Mapped["Book"] = relationship("Book", lazy="selectin")
