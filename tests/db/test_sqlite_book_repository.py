"""
Integration tests for SqliteBookRepository.

These tests use a REAL SQLite database (in-memory, or a file under
tmp_path) instead of mocks: the ISBN uniqueness guarantee lives in the
table's primary key, so only a real database can exercise it.

Test Pattern: AAA (Arrange-Act-Assert)
"""

import sqlite3
import threading

import pytest

from bookstore.domain.entities import Book
from bookstore.domain.errors import BookConflictError, BookNotFoundError, BookStoreError
from bookstore.infrastructure.db.sqlite_book_repository import SqliteBookRepository


# ============================================================================
# INITIALIZATION TESTS
# ============================================================================

class TestRepositoryInitialization:

    def test_creates_table_on_init(self, repo):
        """Repository should create the books table automatically on initialization."""
        assert repo.count() == 0

    def test_creates_parent_directory(self, tmp_path):
        db_path = tmp_path / "nested" / "dir" / "books.db"

        SqliteBookRepository(db_path)

        assert db_path.exists()

    def test_reopening_keeps_data(self, tmp_path, book_data):
        """A file database survives a new repository instance."""
        db_path = tmp_path / "books.db"
        SqliteBookRepository(db_path).create(Book(**book_data))

        reopened = SqliteBookRepository(db_path)

        assert reopened.find_one(book_data["isbn"]).to_dict() == book_data


# ============================================================================
# CREATE TESTS
# ============================================================================

class TestCreate:

    def test_create_increments_count(self, repo, book_data):
        # Arrange
        assert repo.count() == 0

        # Act
        repo.create(Book(**book_data))

        # Assert
        assert repo.count() == 1

    def test_create_then_find_returns_identical_record(self, repo, other_book_data):
        created = repo.create(Book(**other_book_data))

        assert repo.find_one(other_book_data["isbn"]) == created
        assert repo.find_one(other_book_data["isbn"]).to_dict() == other_book_data

    def test_duplicate_isbn_raises_conflict(self, repo, stored_book, book_data):
        with pytest.raises(BookConflictError, match="already exists"):
            repo.create(Book(**{**book_data, "title": "Another title"}))

    def test_duplicate_does_not_overwrite(self, repo, stored_book, book_data):
        with pytest.raises(BookConflictError):
            repo.create(Book(**{**book_data, "title": "Another title"}))

        assert repo.find_one(stored_book.isbn).title == stored_book.title
        assert repo.count() == 1

    def test_concurrent_duplicate_creates_yield_one_success(self, tmp_path, book_data):
        """Two racing creates with the same ISBN: exactly one wins."""
        repo = SqliteBookRepository(tmp_path / "race.db")
        outcomes = []
        barrier = threading.Barrier(2)

        def attempt():
            barrier.wait()
            try:
                repo.create(Book(**book_data))
                outcomes.append("ok")
            except BookConflictError:
                outcomes.append("conflict")

        threads = [threading.Thread(target=attempt) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["conflict", "ok"]
        assert repo.count() == 1


# ============================================================================
# READ TESTS
# ============================================================================

class TestFindAll:

    def test_empty_store_returns_empty_list(self, repo):
        assert repo.find_all() == []

    def test_returns_books_in_insertion_order(self, repo, book_data, other_book_data):
        # Arrange: insert the later ISBN first
        repo.create(Book(**other_book_data))
        repo.create(Book(**book_data))

        # Act
        books = repo.find_all()

        # Assert
        assert [b.isbn for b in books] == ["069161519", "069161518"]

    def test_rows_are_typed(self, repo, stored_book):
        book = repo.find_all()[0]

        assert isinstance(book.pages, int)
        assert isinstance(book.year, int)


class TestFindOne:

    def test_returns_book_when_exists(self, repo, stored_book):
        assert repo.find_one(stored_book.isbn) == stored_book

    def test_missing_isbn_raises_not_found(self, repo):
        with pytest.raises(BookNotFoundError, match="'0'"):
            repo.find_one("0")


# ============================================================================
# UPDATE TESTS
# ============================================================================

class TestUpdate:

    def test_update_subset_preserves_other_fields(self, repo, stored_book):
        updated = repo.update(stored_book.isbn, {"pages": 500})

        assert updated.to_dict() == {**stored_book.to_dict(), "pages": 500}
        assert repo.find_one(stored_book.isbn) == updated

    def test_empty_update_changes_nothing(self, repo, stored_book):
        updated = repo.update(stored_book.isbn, {})

        assert updated == stored_book
        assert repo.find_one(stored_book.isbn) == stored_book

    def test_update_missing_isbn_raises_not_found(self, repo):
        with pytest.raises(BookNotFoundError):
            repo.update("0", {"pages": 1})

    def test_update_all_fields(self, repo, stored_book, other_book_data):
        changes = {k: v for k, v in other_book_data.items() if k != "isbn"}

        updated = repo.update(stored_book.isbn, changes)

        assert updated.to_dict() == {**other_book_data, "isbn": stored_book.isbn}

    def test_update_does_not_touch_other_rows(self, repo, stored_book, other_book_data):
        other = repo.create(Book(**other_book_data))

        repo.update(stored_book.isbn, {"title": "Changed"})

        assert repo.find_one(other.isbn) == other


# ============================================================================
# REMOVE TESTS
# ============================================================================

class TestRemove:

    def test_remove_deletes_book(self, repo, stored_book):
        repo.remove(stored_book.isbn)

        assert repo.count() == 0
        with pytest.raises(BookNotFoundError):
            repo.find_one(stored_book.isbn)

    def test_remove_twice_raises_not_found(self, repo, stored_book):
        repo.remove(stored_book.isbn)

        with pytest.raises(BookNotFoundError):
            repo.remove(stored_book.isbn)

    def test_remove_missing_isbn_raises_not_found(self, repo):
        with pytest.raises(BookNotFoundError):
            repo.remove("0")


# ============================================================================
# STORE FAILURES
# ============================================================================

class TestStoreErrors:

    def test_broken_table_raises_store_error(self, repo):
        """A database error other than a constraint is reported as BookStoreError."""
        repo._shared.execute("DROP TABLE books")

        with pytest.raises(BookStoreError):
            repo.find_all()

    def test_store_error_wraps_sqlite_error(self, repo):
        repo._shared.execute("DROP TABLE books")

        with pytest.raises(BookStoreError) as exc_info:
            repo.count()

        assert isinstance(exc_info.value.__cause__, sqlite3.Error)
