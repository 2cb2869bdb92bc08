"""Book Schemas."""

from pydantic import BaseModel, Field


class BookResponse(BaseModel):
    """Book with author and category flattened to display strings."""
    id: int
    title: str
    price: int
    author: str
    category: str

    @classmethod
    def from_model(cls, book) -> "BookResponse":
        return cls(
            id=book.id,
            title=book.title,
            price=book.price,
            author=book.author.full_name,
            category=book.category.name,
        )


class CartAdd(BaseModel):
    book_id: int = Field(gt=0)


class CartAddResponse(BaseModel):
    message: str
    book_id: int
