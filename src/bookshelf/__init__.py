"""Bookshelf API.

A small relational catalog of authors and books served over HTTP, with a
transactional endpoint that updates a book and its author together.
"""

__version__ = "0.1.0"
