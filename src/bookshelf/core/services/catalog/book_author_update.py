"""Joint update of a book and an author as one unit of work."""

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from src.bookshelf.core.errors import (
    AuthorMismatchError,
    EntityNotFoundError,
    JointUpdateError,
)
from src.bookshelf.core.services.database.db_session import DbSessionService
from src.bookshelf.entities.author import Author, AuthorFields, AuthorRepository
from src.bookshelf.entities.book import Book, BookFields, BookRepository


class BookAuthorUpdateService:
    """Applies a book update and an author update atomically.

    Both UPDATE statements run in a single transaction, book first. The commit is
    the only point where either change becomes visible; any failure rolls back
    both. Nothing is retried.

    By default the author id is trusted as given. With ``verify_book_author`` the
    book's stored author reference must match it, checked inside the same
    transaction before anything is written.
    """

    def __init__(self, database: DbSessionService, verify_book_author: bool = False):
        self._database = database
        self._verify_book_author = verify_book_author

    def update_book_and_author(
        self,
        book_id: int,
        author_id: int,
        book_fields: BookFields,
        author_fields: AuthorFields,
    ) -> tuple[Book, Author]:
        """Update both rows and return their committed values.

        Raises:
            EntityNotFoundError: If either id has no row. Nothing is written.
            AuthorMismatchError: If verification is on and the book references
                another author. Nothing is written.
            JointUpdateError: If the store fails any statement or the commit.
        """
        log = logger.bind(book_id=book_id, author_id=author_id)
        log.debug("Joint update started")
        try:
            with self._database.session_scope() as session:
                books = BookRepository(session)
                authors = AuthorRepository(session)

                if self._verify_book_author:
                    self._check_book_author(books, book_id, author_id)

                book = books.update(book_id, book_fields)
                if book is None:
                    raise EntityNotFoundError("book", book_id)

                author = authors.update(author_id, author_fields)
                if author is None:
                    raise EntityNotFoundError("author", author_id)
        except SQLAlchemyError as e:
            log.warning("Joint update rolled back: {}", type(e).__name__)
            raise JointUpdateError(book_id, author_id) from e
        except (EntityNotFoundError, AuthorMismatchError) as e:
            log.info("Joint update rolled back: {}", e)
            raise

        log.info("Joint update committed")
        return book, author

    @staticmethod
    def _check_book_author(books: BookRepository, book_id: int, author_id: int) -> None:
        current = books.get(book_id)
        if current is None:
            raise EntityNotFoundError("book", book_id)
        if current.authorid != author_id:
            raise AuthorMismatchError(book_id, author_id, current.authorid)
