"""Database initialization script."""

from src.bookshelf.core.services.database.db_manage import DbManageService
from src.bookshelf.core.services.database.db_session import DbSessionService


def init_db() -> None:
    """Create all database tables."""
    database = DbSessionService()
    try:
        DbManageService(database.engine).create_all()
    finally:
        database.dispose()


if __name__ == "__main__":
    init_db()
