"""Entities module with an entity-centric structure.

Each entity has its own package containing:
- entity.py: Wire/domain models with validation
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .author import Author, AuthorFields, AuthorRepository, AuthorTable
from .book import Book, BookFields, BookRepository, BookTable

__all__ = [
    "Author",
    "AuthorFields",
    "AuthorTable",
    "AuthorRepository",
    "Book",
    "BookFields",
    "BookTable",
    "BookRepository",
]
