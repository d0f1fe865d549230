"""
Domain entities for the bookstore.

Entities are objects with a unique identity that runs through time and
different representations. A book's identity is its ISBN.
"""

from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping


@dataclass(frozen=True)
class Book:
    """
    Represents a book record in the store.

    This is the only entity of the domain. All eight attributes are
    required; partial data only ever exists as an update payload, never
    as a Book.
    """

    isbn: str
    """International Standard Book Number, unique across the store"""

    amazon_url: str
    """Product page URL, stored exactly as submitted"""

    author: str
    """Author name"""

    language: str
    """Language the book is written in (free text, e.g. 'english')"""

    pages: int
    """Number of pages"""

    publisher: str
    """Publisher name"""

    title: str
    """Book title"""

    year: int
    """Publication year"""

    def __post_init__(self) -> None:
        """Validate book data."""
        if not self.isbn or not self.isbn.strip():
            raise ValueError("Book isbn cannot be empty")

        for name in ("pages", "year"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Book {name} must be an integer, got {value!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Return the eight-field mapping used on the wire and in the store."""
        return asdict(self)

    def merged(self, changes: Mapping[str, Any]) -> "Book":
        """
        Return a copy of this book with ``changes`` applied.

        Keys not named in ``changes`` keep their current value. The ISBN
        is the book's identity and cannot be changed this way.

        Raises:
            ValueError: If ``changes`` tries to change the ISBN
        """
        if "isbn" in changes and changes["isbn"] != self.isbn:
            raise ValueError(
                f"isbn cannot be changed (got '{changes['isbn']}' for '{self.isbn}')"
            )
        updates = {k: v for k, v in changes.items() if k != "isbn"}
        return replace(self, **updates)

    @staticmethod
    def field_names() -> tuple:
        """Names of the book attributes, in declaration order."""
        return tuple(f.name for f in fields(Book))

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "Book":
        """
        Build a Book from a mapping holding (at least) every attribute.

        Extra keys are ignored, which lets a ``sqlite3.Row`` or a validated
        payload be passed straight through.
        """
        return Book(**{name: data[name] for name in Book.field_names()})
