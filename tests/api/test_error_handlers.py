"""
Tests for the global error handlers: every failure uses the
{"error": {"message", "status"}} envelope.
"""

import pytest
from fastapi.testclient import TestClient

from bookstore.api.error_handlers import GENERIC_SERVER_ERROR, format_error
from bookstore.api.v1.dependencies import get_book_repository
from bookstore.domain.errors import BookStoreError
from bookstore.main import create_app


class _FailingRepository:
    """Repository stub whose reads blow up."""

    def __init__(self, exc: Exception):
        self._exc = exc

    def find_all(self):
        raise self._exc

    def find_one(self, isbn):
        raise self._exc


@pytest.fixture
def failing_client():
    def _make(exc: Exception) -> TestClient:
        app = create_app()
        app.dependency_overrides[get_book_repository] = lambda: _FailingRepository(exc)
        return TestClient(app, raise_server_exceptions=False)
    return _make


def test_format_error():
    assert format_error("nope", 404) == {"error": {"message": "nope", "status": 404}}


def test_not_found_envelope(client):
    response = client.get("/books/0")

    assert response.json() == {
        "error": {"message": "There is no book with an isbn '0'", "status": 404},
    }


def test_validation_envelope(client, other_book_data):
    response = client.post("/books/", json={**other_book_data, "year": "garbage"})

    body = response.json()
    assert body["error"]["status"] == 400
    assert isinstance(body["error"]["message"], list)
    assert body["error"]["message"][0].startswith("year:")


def test_malformed_json_is_400(client):
    response = client.post(
        "/books/",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json()["error"]["status"] == 400


def test_unknown_route_uses_envelope(client):
    response = client.get("/authors/")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found", "status": 404}}


def test_wrong_method_uses_envelope(client):
    response = client.patch("/books/069161518", json={})

    assert response.status_code == 405
    assert response.json()["error"]["status"] == 405


def test_store_error_is_500_without_details(failing_client):
    client = failing_client(BookStoreError("Database error: disk I/O error"))

    response = client.get("/books/")

    assert response.status_code == 500
    assert response.json() == {"error": {"message": GENERIC_SERVER_ERROR, "status": 500}}


def test_unexpected_exception_is_500(failing_client):
    client = failing_client(RuntimeError("secret connection string"))

    response = client.get("/books/069161518")

    assert response.status_code == 500
    assert response.json() == {"error": {"message": GENERIC_SERVER_ERROR, "status": 500}}
