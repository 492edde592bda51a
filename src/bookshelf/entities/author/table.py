"""Author database table model."""

from datetime import date

from src.bookshelf.entities._base import EntityTable


class AuthorTable(EntityTable, table=True):
    """Database persistence model for authors."""

    __tablename__ = "authors"
    __table_args__ = {"sqlite_autoincrement": True}

    name: str
    surname: str
    biography: str
    birthday: date
