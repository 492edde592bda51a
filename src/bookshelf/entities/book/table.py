"""Book database table model."""

from src.bookshelf.entities._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books.

    ``authorid`` is a soft reference to ``authors.id``; no foreign key is declared,
    so deleting an author leaves its books untouched.
    """

    __tablename__ = "books"
    __table_args__ = {"sqlite_autoincrement": True}

    title: str
    authorid: int | None = None
    isbn: str
    year: int
