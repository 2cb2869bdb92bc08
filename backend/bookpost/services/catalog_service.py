"""Catalog Service: book lookups and the per-user cart.

Invariants:
    - Cart rows always reference an existing book
    - Cart operations are scoped to the caller; never touch another user's rows
"""

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.core.domain_types import BookId
from bookpost.core.errors import ResourceNotFoundError
from bookpost.models.book import Book
from bookpost.models.cart import Cart


class CatalogService:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_books(self) -> list[Book]:
        result = await self.db.execute(select(Book).order_by(Book.id))
        return list(result.scalars().all())

    async def get_book(self, book_id: BookId) -> Book:
        book = await self.db.get(Book, book_id)
        if not book:
            raise ResourceNotFoundError("Book", book_id)
        return book

    async def get_cart_books(self, user_id: int) -> list[Book]:
        """Books in the caller's cart, in the order they were added."""
        result = await self.db.execute(
            select(Cart).where(Cart.user_id == user_id).order_by(Cart.id),
        )
        return [cart.book for cart in result.scalars().all()]

    async def add_to_cart(self, user_id: int, book_id: int) -> Cart:
        await self.get_book(book_id)
        cart = Cart(user_id=user_id, book_id=book_id)
        self.db.add(cart)
        await self.db.commit()
        return cart

    async def remove_from_cart(self, user_id: int, book_id: int) -> None:
        """Remove one cart row for book_id."""
        result = await self.db.execute(
            select(Cart)
            .where(Cart.user_id == user_id)
            .where(Cart.book_id == book_id)
            .order_by(Cart.id)
            .limit(1),
        )
        cart = result.scalar_one_or_none()
        if not cart:
            raise ResourceNotFoundError("Cart item", book_id)
        await self.db.delete(cart)
        await self.db.commit()

    async def clear_cart(self, user_id: int) -> int:
        """Delete every cart row of the caller; returns how many were removed."""
        result = await self.db.execute(
            delete(Cart).where(Cart.user_id == user_id),
        )
        if not result.rowcount:
            raise ResourceNotFoundError("Cart")
        await self.db.commit()
        return result.rowcount
