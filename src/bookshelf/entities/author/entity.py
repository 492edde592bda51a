"""Author domain entity."""

from datetime import date

from pydantic import BaseModel, Field

from src.bookshelf.entities._base import Entity


class AuthorFields(BaseModel):
    """Caller-supplied author values for create and update."""

    name: str = Field(description="Author's given name")
    surname: str = Field(description="Author's surname")
    biography: str = Field(description="Free-text biography")
    birthday: date = Field(description="Date of birth, YYYY-MM-DD on the wire")


class Author(AuthorFields, Entity):
    """Author as stored, including its identifier."""
