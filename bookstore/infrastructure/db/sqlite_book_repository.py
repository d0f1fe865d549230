"""
SQLite implementation of the BookRepository port.

This adapter persists Book entities to a single ``books`` table keyed by
ISBN. Uniqueness is left to the primary key: a duplicate insert surfaces
as ``sqlite3.IntegrityError`` and is reported as a conflict.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, List, Mapping, Optional, Union

from bookstore.domain.entities import Book
from bookstore.domain.errors import BookConflictError, BookNotFoundError, BookStoreError
from bookstore.domain.ports import BookRepository

logger = logging.getLogger(__name__)

MEMORY_DB = ":memory:"

_COLUMNS = Book.field_names()


class SqliteBookRepository(BookRepository):
    """
    File-backed databases get a fresh connection per operation.
    ``":memory:"`` keeps one shared connection for the repository's lifetime,
    otherwise every operation would see an empty database.
    """

    def __init__(self, db_path: Union[str, Path]) -> None:
        """
        Initialize the repository with a database path
        """
        self._db_path = str(db_path)
        self._shared: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

        if self._db_path == MEMORY_DB:
            # Requests run on a threadpool, so the shared connection crosses threads
            self._shared = self._open()
        else:
            Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

        self._init_schema()

    def _open(self) -> sqlite3.Connection:
        """Open a database connection with row factory."""
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Yield a connection inside a transaction.

        Commits on success, rolls back on any exception, and closes
        per-operation connections. ``sqlite3.Error`` other than integrity
        violations is re-raised as BookStoreError.
        """
        if self._shared is not None:
            with self._lock:
                with self._guard(self._shared) as conn:
                    yield conn
            return

        try:
            conn = self._open()
        except sqlite3.Error as e:
            logger.error(f"Cannot open database {self._db_path}: {e}")
            raise BookStoreError(f"Database error: {e}") from e

        try:
            with self._guard(conn) as guarded:
                yield guarded
        finally:
            conn.close()

    @contextmanager
    def _guard(self, conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
        try:
            with conn:
                yield conn
        except sqlite3.IntegrityError:
            raise
        except sqlite3.Error as e:
            logger.error(f"Database error on {self._db_path}: {e}")
            raise BookStoreError(f"Database error: {e}") from e

    def _init_schema(self) -> None:
        """Create the books table if it doesn't exist."""
        with self._transaction() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS books (
                    isbn TEXT PRIMARY KEY,
                    amazon_url TEXT NOT NULL,
                    author TEXT NOT NULL,
                    language TEXT NOT NULL,
                    pages INTEGER NOT NULL,
                    publisher TEXT NOT NULL,
                    title TEXT NOT NULL,
                    year INTEGER NOT NULL
                )
            """)

    def close(self) -> None:
        """Close the shared in-memory connection, if any."""
        if self._shared is not None:
            self._shared.close()
            self._shared = None

    def count(self) -> int:
        """Get the total number of books in the store."""
        with self._transaction() as conn:
            result = conn.execute("SELECT COUNT(*) AS cnt FROM books").fetchone()
            return result["cnt"]

    def create(self, book: Book) -> Book:
        """Insert a new book; the primary key rejects duplicate ISBNs."""
        placeholders = ", ".join(f":{c}" for c in _COLUMNS)
        try:
            with self._transaction() as conn:
                conn.execute(
                    f"INSERT INTO books ({', '.join(_COLUMNS)}) VALUES ({placeholders})",
                    book.to_dict(),
                )
        except sqlite3.IntegrityError as e:
            logger.info(f"Rejected duplicate isbn '{book.isbn}': {e}")
            raise BookConflictError(book.isbn) from e

        logger.info(f"Created book isbn='{book.isbn}'")
        return book

    def find_all(self) -> List[Book]:
        """Retrieve all books in insertion order."""
        with self._transaction() as conn:
            rows = conn.execute(
                f"SELECT {', '.join(_COLUMNS)} FROM books ORDER BY rowid"
            ).fetchall()
            return [Book.from_mapping(row) for row in rows]

    def find_one(self, isbn: str) -> Book:
        """Retrieve a book by its ISBN."""
        with self._transaction() as conn:
            row = self._select(conn, isbn)

        if row is None:
            raise BookNotFoundError(isbn)
        return Book.from_mapping(row)

    def update(self, isbn: str, changes: Mapping[str, Any]) -> Book:
        """Merge ``changes`` into the stored book within one transaction."""
        with self._transaction() as conn:
            row = self._select(conn, isbn)
            if row is None:
                raise BookNotFoundError(isbn)

            current = Book.from_mapping(row)
            if not changes:
                return current

            merged = current.merged(changes)
            assignments = ", ".join(f"{c} = :{c}" for c in _COLUMNS if c != "isbn")
            conn.execute(
                f"UPDATE books SET {assignments} WHERE isbn = :isbn",
                merged.to_dict(),
            )

        logger.info(f"Updated book isbn='{isbn}' fields={sorted(changes)}")
        return merged

    def remove(self, isbn: str) -> None:
        """Delete a book by ISBN."""
        with self._transaction() as conn:
            cursor = conn.execute("DELETE FROM books WHERE isbn = ?", (isbn,))
            deleted = cursor.rowcount > 0

        if not deleted:
            raise BookNotFoundError(isbn)
        logger.info(f"Deleted book isbn='{isbn}'")

    def _select(self, conn: sqlite3.Connection, isbn: str) -> Optional[sqlite3.Row]:
        return conn.execute(
            f"SELECT {', '.join(_COLUMNS)} FROM books WHERE isbn = ?",
            (isbn,),
        ).fetchone()
