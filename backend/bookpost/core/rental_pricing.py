"""Rental Pricing: totals, deposit shortfall errors, and invoice line items.

Invariants:
    - A rental total is the plain sum of book prices, one unit per cart row
    - Deposit never goes negative (the debit itself is a guarded UPDATE in RentalService)
"""

from typing import Protocol

from bookpost.core.errors import BadRequestError


class PricedBook(Protocol):
    title: str
    price: int


def compute_total_price(books: list[PricedBook]) -> int:
    """Sum the price of every book in the rental."""
    return sum(book.price for book in books)


def insufficient_deposit(deposit: int, amount: int) -> BadRequestError:
    return BadRequestError(
        f"Insufficient deposit: {deposit} available, {amount} required",
    )


def build_invoice_items(books: list[PricedBook]) -> list[dict]:
    """One invoice line per rented book."""
    return [
        {"name": book.title, "price": book.price, "quantity": 1}
        for book in books
    ]
