"""
API endpoints for book records.

This module defines the FastAPI routes for creating, reading, updating and
deleting books. Each route validates its input, delegates to the repository
and shapes the response; failures are raised as domain errors and turned
into JSON by the handlers in bookstore.api.error_handlers.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from bookstore.domain.errors import BookValidationError
from bookstore.domain.ports import BookRepository
from bookstore.api.v1 import schemas as api
from bookstore.api.v1.converters import (
    domain_book_to_api,
    domain_books_to_api,
    validated_payload_to_domain,
)
from bookstore.api.v1.dependencies import get_book_repository
from bookstore.api.v1.validation import require_valid_book

router = APIRouter(prefix="/books")


@router.get("/", response_model=api.BookListResponse)
def list_books(
    repo: BookRepository = Depends(get_book_repository),
) -> api.BookListResponse:
    """List every book."""
    return domain_books_to_api(repo.find_all())


@router.get("/{isbn}", response_model=api.BookResponse)
def get_book(
    isbn: str,
    repo: BookRepository = Depends(get_book_repository),
) -> api.BookResponse:
    """
    Get a book by its ISBN.

    Raises:
        404: Book not found
    """
    return api.BookResponse(book=domain_book_to_api(repo.find_one(isbn)))


@router.post("/", response_model=api.BookResponse)
def create_book(
    payload: Any = Body(default=None),
    repo: BookRepository = Depends(get_book_repository),
) -> api.BookResponse:
    """
    Create a book from a complete payload.

    Raises:
        400: Invalid payload, or a book with this ISBN already exists
    """
    data = require_valid_book(payload if payload is not None else {})
    book = repo.create(validated_payload_to_domain(data))
    return api.BookResponse(book=domain_book_to_api(book))


@router.put("/{isbn}", response_model=api.BookResponse)
def update_book(
    isbn: str,
    payload: Any = Body(default=None),
    repo: BookRepository = Depends(get_book_repository),
) -> api.BookResponse:
    """
    Update some or all fields of a book. Omitted fields keep their value;
    an empty body changes nothing.

    Raises:
        400: Invalid payload, or the body names a different ISBN
        404: Book not found
    """
    changes = require_valid_book(payload if payload is not None else {}, partial=True)
    if "isbn" in changes and changes["isbn"] != isbn:
        raise BookValidationError([f"isbn: cannot be changed from '{isbn}'"])

    book = repo.update(isbn, changes)
    return api.BookResponse(book=domain_book_to_api(book))


@router.delete("/{isbn}", response_model=api.MessageResponse)
def delete_book(
    isbn: str,
    repo: BookRepository = Depends(get_book_repository),
) -> api.MessageResponse:
    """
    Delete a book.

    Raises:
        404: Book not found
    """
    repo.remove(isbn)
    return api.MessageResponse(message="Book deleted")
