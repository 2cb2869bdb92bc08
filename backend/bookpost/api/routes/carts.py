"""Cart Routes: the caller's pending books before checkout."""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id
from bookpost.infrastructure.database import get_db
from bookpost.schemas.book import BookResponse, CartAdd, CartAddResponse
from bookpost.services.catalog_service import CatalogService

router = APIRouter(prefix="/users/carts", tags=["carts"])


@router.get("", response_model=list[BookResponse])
async def get_cart(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    books = await CatalogService(db).get_cart_books(user_id)
    return [BookResponse.from_model(book) for book in books]


@router.post(
    "", response_model=CartAddResponse, status_code=status.HTTP_201_CREATED,
)
async def add_cart(
    body: CartAdd,
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    cart = await CatalogService(db).add_to_cart(user_id, body.book_id)
    return CartAddResponse(message="Book added to cart", book_id=cart.book_id)


@router.delete("/{book_id}")
async def delete_cart_item(
    book_id: int = Path(..., gt=0),
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove one copy of a book from the cart."""
    await CatalogService(db).remove_from_cart(user_id, book_id)
    return {"message": "Cart deleted successfully"}


@router.delete("")
async def clear_cart(
    user_id: int = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Remove every book from the cart."""
    removed = await CatalogService(db).clear_cart(user_id)
    return {"message": "Cart cleared successfully", "removed": removed}
