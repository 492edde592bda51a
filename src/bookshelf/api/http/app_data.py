from dataclasses import dataclass

from src.bookshelf.core.services import BookAuthorUpdateService, DbSessionService
from src.bookshelf.runtime.config.config_data import ConfigData


@dataclass
class ApplicationDependencies:
    config: ConfigData
    database_service: DbSessionService
    book_author_update_service: BookAuthorUpdateService
