from sqlalchemy import delete, update
from sqlmodel import Session, select

from src.bookshelf.entities.book.entity import Book, BookFields
from src.bookshelf.entities.book.table import BookTable


class BookRepository:
    """Data-access layer for books.

    The repository never commits; whoever owns the session owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Book]:
        statement = select(BookTable).order_by(BookTable.id)
        rows = self._session.exec(statement).all()
        return [Book.model_validate(row) for row in rows]

    def get(self, book_id: int) -> Book | None:
        row = self._session.get(BookTable, book_id, populate_existing=True)
        if row is None:
            return None
        return Book.model_validate(row)

    def create(self, fields: BookFields) -> Book:
        row = BookTable(**fields.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Book.model_validate(row)

    def update(self, book_id: int, fields: BookFields) -> Book | None:
        """Overwrite the book's fields; None when no row has this id."""
        statement = (
            update(BookTable)
            .where(BookTable.id == book_id)
            .values(**fields.model_dump())
        )
        result = self._session.exec(statement)
        if result.rowcount == 0:
            return None
        return self.get(book_id)

    def delete(self, book_id: int) -> bool:
        statement = delete(BookTable).where(BookTable.id == book_id)
        result = self._session.exec(statement)
        return result.rowcount > 0
