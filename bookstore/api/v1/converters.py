"""
Converters between domain entities and API schemas.

This module centralizes all conversion logic between the domain layer
and the API layer, maintaining clean separation of concerns.
"""

from typing import Any, List, Mapping

from bookstore.domain import entities as domain
from bookstore.api.v1 import schemas as api


def domain_book_to_api(book: domain.Book) -> api.Book:
    """
    Convert a domain Book entity to an API Book model.

    Args:
        book: Domain Book entity

    Returns:
        API Book model
    """
    return api.Book(**book.to_dict())


def domain_books_to_api(books: List[domain.Book]) -> api.BookListResponse:
    return api.BookListResponse(books=[domain_book_to_api(b) for b in books])


def validated_payload_to_domain(data: Mapping[str, Any]) -> domain.Book:
    """
    Convert a validated create payload to a domain Book entity.

    Args:
        data: Mapping produced by the validator for a full (create) payload

    Returns:
        Domain Book entity
    """
    return domain.Book.from_mapping(data)
