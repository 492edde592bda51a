"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.bookshelf.api.http.app_data import ApplicationDependencies
from src.bookshelf.core.services import BookAuthorUpdateService, DbSessionService


def get_database_service(request: Request) -> DbSessionService:
    """Get the shared storage handle."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped session; its connection goes back to the pool on exit."""
    session = database.get_session()
    try:
        yield session
    finally:
        session.close()


def get_book_author_update_service(request: Request) -> BookAuthorUpdateService:
    """Get the joint book/author update service."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.book_author_update_service

