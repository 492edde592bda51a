"""Author API router with CRUD operations."""

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from src.bookshelf.api.http.deps import get_db_session
from src.bookshelf.entities import Author, AuthorFields, AuthorRepository

router = APIRouter(prefix="/authors", tags=["authors"])


@router.get("", response_model=list[Author])
def list_authors(
    session: Session = Depends(get_db_session),
) -> list[Author]:
    """List all authors in insertion order."""
    repository = AuthorRepository(session)
    return repository.list_all()


@router.post("", response_model=Author)
def create_author(
    fields: AuthorFields,
    session: Session = Depends(get_db_session),
) -> Author:
    """Create a new author."""
    repository = AuthorRepository(session)
    created_author = repository.create(fields)
    session.commit()
    return created_author


@router.get("/{item_id}", response_model=Author)
def get_author(
    item_id: int,
    session: Session = Depends(get_db_session),
) -> Author:
    """Get an author by ID."""
    repository = AuthorRepository(session)
    author = repository.get(item_id)
    if author is None:
        raise HTTPException(status_code=404, detail="Author not found")
    return author


@router.put("/{item_id}", response_model=Author)
def update_author(
    item_id: int,
    fields: AuthorFields,
    session: Session = Depends(get_db_session),
) -> Author:
    """Update an author."""
    repository = AuthorRepository(session)
    updated_author = repository.update(item_id, fields)
    if updated_author is None:
        raise HTTPException(status_code=404, detail="Author not found")
    session.commit()
    return updated_author


@router.delete("/{item_id}")
def delete_author(
    item_id: int,
    session: Session = Depends(get_db_session),
) -> dict[str, str]:
    """Delete an author. Books referencing it are left as they are."""
    repository = AuthorRepository(session)
    deleted = repository.delete(item_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Author not found")
    session.commit()
    return {"message": "Author deleted successfully"}
