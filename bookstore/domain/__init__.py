"""
Domain layer - Core entities, errors and ports.

This layer contains the Book entity, the error hierarchy, and defines
the ports (interfaces) that the infrastructure layer must implement.

It has NO dependencies on external frameworks, databases, or APIs.
"""

from .entities import Book
from .errors import (
    BookError,
    BookValidationError,
    BookConflictError,
    BookNotFoundError,
    BookStoreError,
)
from .ports import BookRepository

__all__ = [
    # Entities
    "Book",
    # Errors
    "BookError",
    "BookValidationError",
    "BookConflictError",
    "BookNotFoundError",
    "BookStoreError",
    # Ports
    "BookRepository",
]
