"""Book API router with CRUD operations and the joint book/author update."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from src.bookshelf.api.http.deps import get_book_author_update_service, get_db_session
from src.bookshelf.core.errors import (
    AuthorMismatchError,
    EntityNotFoundError,
    JointUpdateError,
)
from src.bookshelf.core.models import BookAuthorUpdate, BookAuthorUpdateResult
from src.bookshelf.core.services import BookAuthorUpdateService
from src.bookshelf.entities import Book, BookFields, BookRepository

router = APIRouter(prefix="/books", tags=["books"])


@router.get("", response_model=list[Book])
def list_books(
    session: Session = Depends(get_db_session),
) -> list[Book]:
    """List all books in insertion order."""
    repository = BookRepository(session)
    return repository.list_all()


@router.post("", response_model=Book)
def create_book(
    fields: BookFields,
    session: Session = Depends(get_db_session),
) -> Book:
    """Create a new book."""
    repository = BookRepository(session)
    created_book = repository.create(fields)
    session.commit()
    return created_book


@router.get("/{item_id}", response_model=Book)
def get_book(
    item_id: int,
    session: Session = Depends(get_db_session),
) -> Book:
    """Get a book by ID."""
    repository = BookRepository(session)
    book = repository.get(item_id)
    if book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    return book


@router.put("/{item_id}", response_model=Book)
def update_book(
    item_id: int,
    fields: BookFields,
    session: Session = Depends(get_db_session),
) -> Book:
    """Update a book."""
    repository = BookRepository(session)
    updated_book = repository.update(item_id, fields)
    if updated_book is None:
        raise HTTPException(status_code=404, detail="Book not found")
    session.commit()
    return updated_book


@router.delete("/{item_id}")
def delete_book(
    item_id: int,
    session: Session = Depends(get_db_session),
) -> dict[str, str]:
    """Delete a book."""
    repository = BookRepository(session)
    deleted = repository.delete(item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Book not found")
    session.commit()
    return {"message": "Book deleted successfully"}


@router.put("/{book_id}/authors/{author_id}", response_model=BookAuthorUpdateResult)
def update_book_and_author(
    book_id: int,
    author_id: int,
    payload: BookAuthorUpdate,
    service: BookAuthorUpdateService = Depends(get_book_author_update_service),
) -> BookAuthorUpdateResult:
    """Update a book and an author together; either both change or neither does."""
    try:
        book, author = service.update_book_and_author(
            book_id, author_id, payload.book, payload.author
        )
    except EntityNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthorMismatchError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except JointUpdateError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return BookAuthorUpdateResult(book=book, author=author)
