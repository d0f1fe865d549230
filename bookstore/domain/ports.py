"""
Port interfaces (protocols) for the domain layer.

Ports define the contracts between the domain and infrastructure layers.
They are implemented by adapters in the infrastructure layer, allowing
the domain to remain independent of technical details.
"""

from typing import Any, List, Mapping, Protocol

from .entities import Book


class BookRepository(Protocol):
    """
    Port for persisting and retrieving books.

    This repository is responsible for CRUD operations on Book entities.
    It abstracts away the persistence mechanism (SQLite, PostgreSQL, etc.).

    Implementations should handle:
    - ISBN uniqueness through the store's own constraint, not a prior read
    - Translating store failures into domain errors
    """

    def create(self, book: Book) -> Book:
        """
        Insert a new book.

        Args:
            book: The book to persist

        Returns:
            The stored book

        Raises:
            BookConflictError: If a book with the same ISBN exists
            BookStoreError: If a database error occurs
        """
        ...

    def find_all(self) -> List[Book]:
        """
        Retrieve every book, in insertion order.

        Returns:
            List of all books (empty if the store is empty)
        """
        ...

    def find_one(self, isbn: str) -> Book:
        """
        Retrieve a book by ISBN.

        Raises:
            BookNotFoundError: If no book has this ISBN
        """
        ...

    def update(self, isbn: str, changes: Mapping[str, Any]) -> Book:
        """
        Merge ``changes`` into an existing book and persist it.

        Attributes not named in ``changes`` keep their stored value.

        Args:
            isbn: ISBN of the book to update
            changes: Validated subset of book attributes

        Returns:
            The merged book as stored

        Raises:
            BookNotFoundError: If no book has this ISBN
            BookStoreError: If a database error occurs
        """
        ...

    def remove(self, isbn: str) -> None:
        """
        Delete a book.

        Raises:
            BookNotFoundError: If no book has this ISBN
        """
        ...

    def count(self) -> int:
        """
        Get the total number of books in the store.

        Returns:
            Total book count
        """
        ...
