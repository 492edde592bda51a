"""Author entity module.

- Author / AuthorFields: Wire and domain models
- AuthorTable: Database persistence model
- AuthorRepository: Data access layer
"""

from .entity import Author, AuthorFields
from .repository import AuthorRepository
from .table import AuthorTable

__all__ = ["Author", "AuthorFields", "AuthorTable", "AuthorRepository"]
