from sqlalchemy import delete, update
from sqlmodel import Session, select

from src.bookshelf.entities.author.entity import Author, AuthorFields
from src.bookshelf.entities.author.table import AuthorTable


class AuthorRepository:
    """Data-access layer for authors.

    The repository never commits; whoever owns the session owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Author]:
        statement = select(AuthorTable).order_by(AuthorTable.id)
        rows = self._session.exec(statement).all()
        return [Author.model_validate(row) for row in rows]

    def get(self, author_id: int) -> Author | None:
        row = self._session.get(AuthorTable, author_id, populate_existing=True)
        if row is None:
            return None
        return Author.model_validate(row)

    def create(self, fields: AuthorFields) -> Author:
        row = AuthorTable(**fields.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Author.model_validate(row)

    def update(self, author_id: int, fields: AuthorFields) -> Author | None:
        """Overwrite the author's fields; None when no row has this id."""
        statement = (
            update(AuthorTable)
            .where(AuthorTable.id == author_id)
            .values(**fields.model_dump())
        )
        result = self._session.exec(statement)
        if result.rowcount == 0:
            return None
        return self.get(author_id)

    def delete(self, author_id: int) -> bool:
        statement = delete(AuthorTable).where(AuthorTable.id == author_id)
        result = self._session.exec(statement)
        return result.rowcount > 0
