"""Payment ORM: record of a rental being paid from the user's deposit.

Invariants:
    - At most one Payment per Rental (unique rental_id)
    - invoice_id/invoice_url set only when the invoice gateway is enabled
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from bookpost.db.base import Base


class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    rental_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("rentals.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False,
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    invoice_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    invoice_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    paid_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
