"""Book domain entity and its boundary value types."""

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, Field

from src.bookshelf.entities._base import Entity

_ISBN_SEPARATORS = re.compile(r"[\s-]")
_ISBN_10 = re.compile(r"^\d{9}[\dX]$")
_ISBN_13 = re.compile(r"^\d{13}$")


def check_isbn(value: str) -> str:
    """Accept ISBN-10 or ISBN-13 text, with or without hyphens and spaces.

    The supplied text is kept as-is (trimmed); only its compact form is checked.
    Check digits are not verified.
    """
    value = value.strip()
    compact = _ISBN_SEPARATORS.sub("", value).upper()
    if not (_ISBN_10.match(compact) or _ISBN_13.match(compact)):
        raise ValueError("ISBN must have 10 characters (last may be X) or 13 digits")
    return value


Isbn = Annotated[str, AfterValidator(check_isbn)]
Year = Annotated[int, Field(ge=0, le=9999)]


class BookFields(BaseModel):
    """Caller-supplied book values for create and update."""

    title: str = Field(description="Book title")
    authorid: int | None = Field(
        default=None, description="Identifier of the book's author (soft reference)"
    )
    isbn: Isbn = Field(description="ISBN-10 or ISBN-13")
    year: Year = Field(description="Publication year")


class Book(BookFields, Entity):
    """Book as stored, including its identifier."""
