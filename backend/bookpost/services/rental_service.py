"""Rental Service: checkout, payment, and rent history.

Invariants:
    - Checkout creates the Rental, its RentalDetails, and clears the cart in one commit
    - Payment is allowed once, by the rental owner, when the deposit covers the total
    - Status flip and deposit debit are guarded UPDATEs: a concurrent payment or top-up
      can neither double-charge nor overwrite the balance
    - If the invoice gateway fails, nothing from the payment is committed

Design Decisions:
    - Invoice requested before commit: a paid rental always has its invoice when the gateway is on
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.core.domain_types import RentalId, RentalStatus, UserId
from bookpost.core.errors import (
    BadRequestError, ResourceNotFoundError, UnauthorizedError,
)
from bookpost.core.rental_pricing import (
    build_invoice_items, compute_total_price, insufficient_deposit,
)
from bookpost.infrastructure.invoice_client import Invoice, InvoiceClient
from bookpost.models.cart import Cart
from bookpost.models.payment import Payment
from bookpost.models.rental import Rental
from bookpost.models.rental_detail import RentalDetail
from bookpost.models.user import User

logger = logging.getLogger(__name__)


class RentalService:
    """Cart-to-rental transition and payment."""

    def __init__(
        self, db: AsyncSession, invoice_client: InvoiceClient | None = None,
    ):
        self.db = db
        self.invoice_client = invoice_client

    async def checkout(self, user_id: int) -> Rental:
        """Turn the caller's cart into a new rental."""
        result = await self.db.execute(
            select(Cart).where(Cart.user_id == user_id).order_by(Cart.id),
        )
        carts = result.scalars().all()
        if not carts:
            raise BadRequestError("Cart is empty, cannot create order")

        rental = Rental(
            user_id=user_id,
            total_price=compute_total_price([cart.book for cart in carts]),
            rental_date=datetime.now(timezone.utc),
            rental_status=RentalStatus.CREATED.value,
            details=[
                RentalDetail(book_id=cart.book_id, returned=False)
                for cart in carts
            ],
        )
        self.db.add(rental)
        await self.db.execute(delete(Cart).where(Cart.user_id == user_id))
        await self.db.commit()
        logger.info(
            f"Rental {rental.id} created with {len(carts)} book(s)",
            extra={"user_id": user_id},
        )
        return rental

    async def pay(
        self, user_id: UserId, rental_id: RentalId,
    ) -> tuple[Rental, int, Invoice | None]:
        """Pay a rental from the caller's deposit; returns the remaining deposit."""
        rental = await self.db.get(Rental, rental_id)
        if not rental:
            raise ResourceNotFoundError("Order", rental_id)
        if rental.user_id != user_id:
            raise UnauthorizedError("You are not authorized to pay for this order")
        if rental.rental_status == RentalStatus.PAID.value:
            raise BadRequestError("Order is already paid")

        user = await self.db.get(User, user_id)
        if not user:
            raise ResourceNotFoundError("User", user_id)

        await self._mark_paid(rental)
        deposit = await self._debit_deposit(user_id, rental.total_price)

        invoice = None
        if self.invoice_client is not None and self.invoice_client.enabled:
            books = [detail.book for detail in rental.details]
            invoice = await self.invoice_client.create_invoice(
                external_id=f"rental-{rental.id}",
                amount=rental.total_price,
                description=f"Book rental #{rental.id}",
                customer_name=user.full_name or user.username,
                customer_email=user.email,
                items=build_invoice_items(books),
            )

        self.db.add(Payment(
            rental_id=rental.id,
            user_id=user_id,
            amount=rental.total_price,
            invoice_id=invoice.id if invoice else None,
            invoice_url=invoice.invoice_url if invoice else None,
        ))
        await self.db.commit()
        logger.info(f"Rental {rental.id} paid", extra={"user_id": user_id})
        return rental, deposit, invoice

    async def _mark_paid(self, rental: Rental) -> None:
        """Flip created -> paid; 400 when another payment got there first."""
        result = await self.db.execute(
            update(Rental)
            .where(Rental.id == rental.id)
            .where(Rental.rental_status == RentalStatus.CREATED.value)
            .values(rental_status=RentalStatus.PAID.value),
        )
        if result.rowcount != 1:
            raise BadRequestError("Order is already paid")
        rental.rental_status = RentalStatus.PAID.value

    async def _debit_deposit(self, user_id: int, amount: int) -> int:
        """Subtract amount in one guarded UPDATE; returns the new balance."""
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .where(User.deposit >= amount)
            .values(deposit=User.deposit - amount)
            .returning(User.deposit),
        )
        deposit = result.scalar_one_or_none()
        if deposit is None:
            available = await self.db.scalar(
                select(User.deposit).where(User.id == user_id),
            )
            raise insufficient_deposit(available or 0, amount)
        return deposit

    async def history(self, user_id: int) -> list[Rental]:
        """Caller's rentals, newest first."""
        result = await self.db.execute(
            select(Rental)
            .where(Rental.user_id == user_id)
            .order_by(Rental.id.desc()),
        )
        return list(result.scalars().all())
