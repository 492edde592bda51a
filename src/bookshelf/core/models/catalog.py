from pydantic import BaseModel, Field

from src.bookshelf.entities import Author, AuthorFields, Book, BookFields


class BookAuthorUpdate(BaseModel):
    """Body of a joint update: new values for the book and for the author."""

    book: BookFields = Field(description="New book values")
    author: AuthorFields = Field(description="New author values")


class BookAuthorUpdateResult(BaseModel):
    """Committed values of both rows after a joint update."""

    book: Book
    author: Author
