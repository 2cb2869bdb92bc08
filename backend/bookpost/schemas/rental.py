"""Rental Schemas: checkout, payment, and rent history.

Invariants:
    - RentalHistoryItem.books lists only that rental's books, in detail order
    - PaymentResponse.invoice is None when the invoice gateway is disabled
"""

from datetime import datetime

from pydantic import BaseModel

from bookpost.schemas.book import BookResponse


class CheckoutResponse(BaseModel):
    message: str
    order_id: int
    total_price: int


class InvoiceResponse(BaseModel):
    id: str
    invoice_url: str


class PaymentResponse(BaseModel):
    message: str
    order_id: int
    status: str
    deposit: int
    invoice: InvoiceResponse | None = None


class RentalHistoryItem(BaseModel):
    rental_id: int
    total_price: int
    date: datetime | None = None
    status: str
    books: list[BookResponse]

    @classmethod
    def from_model(cls, rental) -> "RentalHistoryItem":
        return cls(
            rental_id=rental.id,
            total_price=rental.total_price,
            date=rental.rental_date,
            status=rental.rental_status,
            books=[BookResponse.from_model(d.book) for d in rental.details],
        )
