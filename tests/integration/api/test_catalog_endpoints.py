"""Integration tests for authors, publishers and books."""

import pytest
from fastapi.testclient import TestClient

from tests.shared.fixtures.factories import ISBN_PAIRS


class TestAuthors:
    """Tests for /api/authors."""

    def test_plain_user_cannot_create(
        self,
        test_client: TestClient,
        api_prefix,
        auth_headers,
    ):
        response = test_client.post(
            f"{api_prefix}/authors",
            json={"name": "Someone", "country": "UK"},
            headers=auth_headers,
        )

        assert response.status_code == 401
        assert response.json() == {
            "detail": "You are not authorized to perform this action.",
            "code": "NOT_AUTHORIZED",
        }

    def test_list_requires_sign_in(self, test_client: TestClient, api_prefix):
        assert test_client.get(f"{api_prefix}/authors").status_code == 401

    def test_crud(self, test_client: TestClient, api_prefix, admin_headers, author_id):
        fetched = test_client.get(f"{api_prefix}/authors/{author_id}", headers=admin_headers)
        assert fetched.status_code == 200
        assert fetched.json() == {
            "id": author_id,
            "name": "Ursula K. Le Guin",
            "country": "US",
        }

        updated = test_client.put(
            f"{api_prefix}/authors/{author_id}",
            json={"country": "USA"},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["country"] == "USA"
        assert updated.json()["name"] == "Ursula K. Le Guin"

        deleted = test_client.delete(
            f"{api_prefix}/authors/{author_id}",
            headers=admin_headers,
        )
        assert deleted.status_code == 204

        missing = test_client.get(f"{api_prefix}/authors/{author_id}", headers=admin_headers)
        assert missing.status_code == 404
        assert missing.json()["code"] == "AUTHOR_NOT_FOUND"

    def test_list_is_paginated(self, test_client: TestClient, api_prefix, admin_headers):
        for i in range(3):
            test_client.post(
                f"{api_prefix}/authors",
                json={"name": f"Author {i}", "country": "US"},
                headers=admin_headers,
            )

        response = test_client.get(
            f"{api_prefix}/authors",
            params={"currentPage": 2, "perPage": 2},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["countAuthors"] == 3
        assert data["currentPage"] == 2
        assert data["perPage"] == 2
        assert data["totalPages"] == 2
        assert len(data["authors"]) == 1

    @pytest.mark.parametrize(
        "params",
        [{"currentPage": "abc"}, {"currentPage": 0, "perPage": -5}],
    )
    def test_unusable_pagination_falls_back_to_defaults(
        self,
        test_client: TestClient,
        api_prefix,
        auth_headers,
        params,
    ):
        response = test_client.get(
            f"{api_prefix}/authors",
            params=params,
            headers=auth_headers,
        )

        assert response.status_code == 200
        assert response.json()["currentPage"] == 1
        assert response.json()["perPage"] == 10

    def test_author_with_books_cannot_be_deleted(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
    ):
        test_client.post(f"{api_prefix}/books", json=book_payload, headers=admin_headers)

        response = test_client.delete(
            f"{api_prefix}/authors/{book_payload['authorID']}",
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["code"] == "HAS_DEPENDENT_BOOKS"


class TestPublishers:
    """Tests for /api/publishers."""

    def test_create_and_list(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        publisher_id,
    ):
        response = test_client.get(f"{api_prefix}/publishers", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["countPublishers"] == 1
        assert data["publishers"][0]["id"] == publisher_id

    def test_empty_name_is_rejected(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
    ):
        response = test_client.post(
            f"{api_prefix}/publishers",
            json={"name": "   ", "country": "US"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_publisher_with_books_cannot_be_deleted(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
    ):
        test_client.post(f"{api_prefix}/books", json=book_payload, headers=admin_headers)

        response = test_client.delete(
            f"{api_prefix}/publishers/{book_payload['publisherID']}",
            headers=admin_headers,
        )

        assert response.status_code == 409


class TestBooks:
    """Tests for /api/books."""

    def test_create_get_update_delete(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
    ):
        created = test_client.post(
            f"{api_prefix}/books",
            json=book_payload,
            headers=admin_headers,
        )
        assert created.status_code == 201
        book_id = created.json()["id"]
        assert created.json()["isbn13"] == book_payload["isbn13"]

        fetched = test_client.get(f"{api_prefix}/books/{book_id}", headers=admin_headers)
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "The Dispossessed"

        updated = test_client.put(
            f"{api_prefix}/books/{book_id}",
            json={"status": "borrowed"},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["status"] == "borrowed"
        assert updated.json()["title"] == "The Dispossessed"

        deleted = test_client.delete(f"{api_prefix}/books/{book_id}", headers=admin_headers)
        assert deleted.status_code == 204

        missing = test_client.get(f"{api_prefix}/books/{book_id}", headers=admin_headers)
        assert missing.status_code == 404

    def test_duplicate_isbn(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
    ):
        test_client.post(f"{api_prefix}/books", json=book_payload, headers=admin_headers)

        isbn10, _ = ISBN_PAIRS[1]
        response = test_client.post(
            f"{api_prefix}/books",
            json={**book_payload, "isbn10": isbn10},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json() == {
            "detail": "ISBN-13 already exists.",
            "code": "DUPLICATE_ISBN",
        }

    def test_unknown_author(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
    ):
        response = test_client.post(
            f"{api_prefix}/books",
            json={**book_payload, "authorID": 9999},
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["code"] == "AUTHOR_NOT_FOUND"

    def test_invalid_isbn_checksum(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
    ):
        response = test_client.post(
            f"{api_prefix}/books",
            json={**book_payload, "isbn13": "9780306406158"},
            headers=admin_headers,
        )
        assert response.status_code == 422

    def test_list_embeds_author_and_publisher(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        auth_headers,
        book_payload,
    ):
        test_client.post(f"{api_prefix}/books", json=book_payload, headers=admin_headers)

        response = test_client.get(f"{api_prefix}/books", headers=auth_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["countBooks"] == 1
        assert data["books"][0]["author"]["name"] == "Ursula K. Le Guin"
        assert data["books"][0]["publisher"]["name"] == "Harper & Row"


class TestSearch:
    """Tests for GET /api/books/search/{isbn} (public)."""

    @pytest.mark.parametrize("index", [0, 1])
    def test_search_by_either_isbn(
        self,
        test_client: TestClient,
        api_prefix,
        admin_headers,
        book_payload,
        index,
    ):
        test_client.post(f"{api_prefix}/books", json=book_payload, headers=admin_headers)
        isbn = ISBN_PAIRS[0][index]

        response = test_client.get(f"{api_prefix}/books/search/{isbn}")

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "The Dispossessed"
        assert data["author"] == "Ursula K. Le Guin"
        assert data["publisher"] == "Harper & Row"

    def test_search_miss(self, test_client: TestClient, api_prefix):
        response = test_client.get(f"{api_prefix}/books/search/9780131103627")

        assert response.status_code == 404
        assert response.json() == {"detail": "Book not found.", "code": "BOOK_NOT_FOUND"}
