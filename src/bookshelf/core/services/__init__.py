"""Core services exports."""

# Database Service
from .database.db_manage import DbManageService
from .database.db_session import DbSessionService

# Catalog Services
from .catalog.book_author_update import BookAuthorUpdateService

__all__ = [
    # Database Service
    "DbSessionService",
    "DbManageService",
    # Catalog Services
    "BookAuthorUpdateService",
]
