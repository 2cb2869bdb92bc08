"""Rental Routes: checkout, payment, rent history."""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id, get_invoice_client
from bookpost.infrastructure.database import get_db
from bookpost.infrastructure.invoice_client import InvoiceClient
from bookpost.schemas.rental import (
    CheckoutResponse, InvoiceResponse, PaymentResponse, RentalHistoryItem,
)
from bookpost.services.rental_service import RentalService

router = APIRouter(prefix="/users", tags=["rentals"])


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create a rental from the cart, then clear the cart."""
    rental = await RentalService(db).checkout(user_id)
    return CheckoutResponse(
        message="Order created successfully",
        order_id=rental.id,
        total_price=rental.total_price,
    )


@router.post("/rentals/{rental_id}/pay", response_model=PaymentResponse)
async def pay_rental(
    rental_id: int = Path(..., gt=0),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    invoice_client: InvoiceClient = Depends(get_invoice_client),
):
    """Pay a rental from the deposit; attaches an invoice when the gateway is on."""
    rental, deposit, invoice = await RentalService(db, invoice_client).pay(
        user_id, rental_id,
    )
    return PaymentResponse(
        message="Payment successful",
        order_id=rental.id,
        status=rental.rental_status,
        deposit=deposit,
        invoice=(
            InvoiceResponse(id=invoice.id, invoice_url=invoice.invoice_url)
            if invoice else None
        ),
    )


@router.get("/rent-history", response_model=list[RentalHistoryItem])
async def rent_history(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    rentals = await RentalService(db).history(user_id)
    return [RentalHistoryItem.from_model(rental) for rental in rentals]
