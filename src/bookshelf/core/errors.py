"""Domain errors raised by repositories and catalog services.

None of these carry an HTTP status; the routers decide how each one is reported.
"""


class BookshelfError(Exception):
    """Base class for bookshelf domain errors."""


class EntityNotFoundError(BookshelfError):
    """Raised when an identifier has no matching row."""

    def __init__(self, entity: str, entity_id: int):
        super().__init__(f"{entity.capitalize()} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class AuthorMismatchError(BookshelfError):
    """Raised when a joint update names an author the book does not reference."""

    def __init__(self, book_id: int, author_id: int, actual_author_id: int | None):
        super().__init__(
            f"Book {book_id} references author {actual_author_id}, not {author_id}"
        )
        self.book_id = book_id
        self.author_id = author_id
        self.actual_author_id = actual_author_id


class JointUpdateError(BookshelfError):
    """Raised when the store rejects any step of a joint book/author update.

    The underlying store exception is chained as ``__cause__``.
    """

    def __init__(self, book_id: int, author_id: int):
        super().__init__(
            f"Joint update of book {book_id} and author {author_id} failed"
        )
        self.book_id = book_id
        self.author_id = author_id
