"""Book Routes: catalog listing and lookup."""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from bookpost.api.dependencies import get_current_user_id
from bookpost.infrastructure.database import get_db
from bookpost.schemas.book import BookResponse
from bookpost.services.catalog_service import CatalogService

router = APIRouter(
    prefix="/books", tags=["books"],
    dependencies=[Depends(get_current_user_id)],
)


@router.get("/all", response_model=list[BookResponse])
async def get_all_books(db: AsyncSession = Depends(get_db)):
    books = await CatalogService(db).list_books()
    return [BookResponse.from_model(book) for book in books]


@router.get("/{book_id}", response_model=BookResponse)
async def get_book_by_id(
    book_id: int = Path(..., gt=0), db: AsyncSession = Depends(get_db),
):
    book = await CatalogService(db).get_book(book_id)
    return BookResponse.from_model(book)
