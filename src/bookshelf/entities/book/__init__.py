"""Book entity module.

- Book / BookFields: Wire and domain models, with the Isbn and Year value types
- BookTable: Database persistence model
- BookRepository: Data access layer
"""

from .entity import Book, BookFields, Isbn, Year
from .repository import BookRepository
from .table import BookTable

__all__ = ["Book", "BookFields", "BookTable", "BookRepository", "Isbn", "Year"]
