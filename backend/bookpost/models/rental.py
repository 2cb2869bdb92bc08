"""Rental ORM: an order created from a user's cart.

Invariants:
    - rental_status transitions: created -> paid, never back
    - total_price is fixed at checkout from the books' prices at that moment
    - Owns its RentalDetail rows (cascade delete)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookpost.core.domain_types import RentalStatus
from bookpost.db.base import Base


class Rental(Base):
    __tablename__ = "rentals"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    total_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    rental_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    rental_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=RentalStatus.CREATED.value,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    details: Mapped[list["RentalDetail"]] = relationship(
        "RentalDetail", back_populates="rental",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="RentalDetail.id",
    )
