"""
FastAPI dependencies for dependency injection.

This module provides the singleton repository instance for use with
FastAPI's Depends() system. Tests replace it through
``app.dependency_overrides[get_book_repository]``.
"""

from typing import Optional

from bookstore.config import get_settings
from bookstore.domain.ports import BookRepository
from bookstore.infrastructure.db.sqlite_book_repository import SqliteBookRepository

# Module-level singleton (initialized lazily)
_book_repository: Optional[BookRepository] = None


def get_book_repository() -> BookRepository:
    """Provide a singleton instance of the book repository."""
    global _book_repository
    if _book_repository is None:
        _book_repository = SqliteBookRepository(get_settings().database_path)
    return _book_repository


def reset_dependencies() -> None:
    """
    Reset the singleton so the next request reopens the repository.

    Useful for testing with a different DATABASE_PATH.
    """
    global _book_repository
    _book_repository = None
