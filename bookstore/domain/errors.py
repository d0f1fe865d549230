"""
Error hierarchy for the bookstore domain.

Every failure the API reports to a caller is a BookError subclass. Each one
carries the HTTP status it maps to, so the API layer converts them in a
single place instead of in every route.

    BookValidationError  -> 400  (malformed, missing or wrong-typed fields)
    BookConflictError    -> 400  (duplicate isbn on create)
    BookNotFoundError    -> 404  (unknown isbn)
    BookStoreError       -> 500  (database failure)
"""

from typing import List, Union


class BookError(Exception):
    """Base exception for all bookstore errors."""

    http_status: int = 500

    def __init__(self, message: Union[str, List[str]], http_status: int | None = None):
        super().__init__(message if isinstance(message, str) else "; ".join(message))
        self.message = message
        if http_status is not None:
            self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the standard REST error envelope."""
        return {
            "error": {
                "message": self.message,
                "status": self.http_status,
            },
        }


class BookValidationError(BookError):
    """Request payload failed schema validation.

    ``message`` is the full list of violations, one string per problem.
    """

    http_status = 400

    def __init__(self, errors: List[str]):
        super().__init__(list(errors))
        self.errors = list(errors)


class BookConflictError(BookError):
    """A book with the same ISBN already exists."""

    http_status = 400

    def __init__(self, isbn: str):
        super().__init__(f"Book with isbn '{isbn}' already exists")
        self.isbn = isbn


class BookNotFoundError(BookError):
    """No book has the requested ISBN."""

    http_status = 404

    def __init__(self, isbn: str):
        super().__init__(f"There is no book with an isbn '{isbn}'")
        self.isbn = isbn


class BookStoreError(BookError):
    """The underlying store failed; details stay in the logs."""

    http_status = 500
