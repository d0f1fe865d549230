"""Shared fixtures: an in-memory repository and an API client wired to it."""

import pytest
from fastapi.testclient import TestClient

from bookstore.api.v1.dependencies import get_book_repository
from bookstore.domain.entities import Book
from bookstore.infrastructure.db.sqlite_book_repository import SqliteBookRepository
from bookstore.main import create_app


@pytest.fixture
def book_data() -> dict:
    """A complete, valid book payload."""
    return {
        "isbn": "069161518",
        "amazon_url": "http://a.co/eobPtX2",
        "author": "Matthew Lane",
        "language": "english",
        "pages": 4,
        "publisher": "Bellhouse Publishing",
        "title": "Power-Up: Unlocking the Hidden Mathematics in Video Games",
        "year": 2017,
    }


@pytest.fixture
def other_book_data() -> dict:
    return {
        "isbn": "069161519",
        "amazon_url": "http://a.co/eobPtX1",
        "author": "Biggs Lewis",
        "language": "english",
        "pages": 102,
        "publisher": "Bellhouse Publishing",
        "title": "Super Up Your Game",
        "year": 2017,
    }


@pytest.fixture
def repo():
    """
    Create a fresh in-memory repository.

    Each test gets an isolated, empty database.
    """
    repository = SqliteBookRepository(":memory:")
    yield repository
    repository.close()


@pytest.fixture
def stored_book(repo, book_data) -> Book:
    """A book already present in ``repo``."""
    return repo.create(Book(**book_data))


@pytest.fixture
def client(repo):
    """TestClient for a fresh app whose routes use ``repo``."""
    app = create_app()
    app.dependency_overrides[get_book_repository] = lambda: repo
    with TestClient(app) as test_client:
        yield test_client
