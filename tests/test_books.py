"""
Tests for Books API Endpoints

Tests for /api/v1/books endpoints.
"""

from datetime import date

from fastapi import status

from tests.conftest import make_author, make_book


def book_data(author_ids: list[int], **overrides) -> dict:
    data = {
        "title": "Labyrinths",
        "synopsis": "Selected stories and other writings.",
        "identifier_url": "https://openlibrary.org/works/OL2663659W",
        "cover_source": "https://covers.example.com/labyrinths.jpg",
        "publication_date": "1962-01-01",
        "author_ids": author_ids,
    }
    data.update(overrides)
    return data


class TestListBooks:
    """Tests for GET /api/v1/books/ endpoint."""

    def test_list_books_empty(self, client):
        response = client.get("/api/v1/books/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []

    def test_list_books_with_authors(self, client, shared_book):
        response = client.get("/api/v1/books/")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert len(data) == 1
        assert sorted(a["surname"] for a in data[0]["authors"]) == ["Bioy Casares", "Borges"]
        assert all("books" not in a for a in data[0]["authors"])


class TestGetBook:
    """Tests for GET /api/v1/books/{book_id} and /title/{title}."""

    def test_get_book_success(self, client, sample_book, sample_author):
        response = client.get(f"/api/v1/books/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Ficciones"
        assert data["publication_date"] == "1944-01-01"
        assert [a["id"] for a in data["authors"]] == [sample_author.id]

    def test_get_book_not_found(self, client):
        response = client.get("/api/v1/books/99999")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_stored_book_returned_as_is(self, client, db_session, sample_author):
        book = make_book(
            db_session,
            "el hacedor",
            [sample_author],
            identifier_url="urn:isbn:9788420633121",
        )

        response = client.get(f"/api/v1/books/{book.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "el hacedor"
        assert data["identifier_url"] == "urn:isbn:9788420633121"

    def test_by_title(self, client, sample_book, shared_book):
        response = client.get("/api/v1/books/title/ficc")

        assert response.status_code == status.HTTP_200_OK
        assert [b["id"] for b in response.json()] == [sample_book.id]

    def test_by_title_no_match(self, client, sample_book):
        response = client.get("/api/v1/books/title/Dune")

        assert response.status_code == status.HTTP_404_NOT_FOUND


class TestBooksByAuthor:
    """Tests for /by-author/{author_id} and /by-author-name/{name}."""

    def test_by_author_id(self, client, sample_book, shared_book, second_author):
        response = client.get(f"/api/v1/books/by-author/{second_author.id}")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [b["id"] for b in data] == [shared_book.id]
        assert "authors" not in data[0]

    def test_by_unknown_author_id(self, client):
        response = client.get("/api/v1/books/by-author/99999")

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_by_author_without_books(self, client, second_author):
        response = client.get(f"/api/v1/books/by-author/{second_author.id}")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_by_author_name_lists_each_book_once(self, client, db_session, sample_author, second_author):
        """Both authors match 'o', but their shared book appears only once."""
        shared = make_book(db_session, "Chronicles of Bustos Domecq", [sample_author, second_author])
        solo = make_book(db_session, "El Aleph", [sample_author])

        response = client.get("/api/v1/books/by-author-name/o")

        assert response.status_code == status.HTTP_200_OK
        assert [b["id"] for b in response.json()] == [shared.id, solo.id]

    def test_by_author_name_matches_surname(self, client, sample_book, shared_book):
        response = client.get("/api/v1/books/by-author-name/casares")

        assert [b["id"] for b in response.json()] == [shared_book.id]

    def test_by_author_name_no_author(self, client, sample_book):
        response = client.get("/api/v1/books/by-author-name/tolkien")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestCreateBook:
    """Tests for POST /api/v1/books/ endpoint."""

    def test_create_book(self, client, admin_headers, sample_author, second_author):
        response = client.post(
            "/api/v1/books/",
            json=book_data([sample_author.id, second_author.id]),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["title"] == "Labyrinths"
        assert sorted(a["id"] for a in data["authors"]) == sorted([sample_author.id, second_author.id])

    def test_create_without_authors(self, client, admin_headers):
        response = client.post("/api/v1/books/", json=book_data([]), headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_with_unknown_author(self, client, admin_headers, sample_author):
        response = client.post(
            "/api/v1/books/",
            json=book_data([sample_author.id, 99999]),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert client.get("/api/v1/books/").json() == []

    def test_create_requires_admin(self, client, user_headers, sample_author):
        response = client.post(
            "/api/v1/books/",
            json=book_data([sample_author.id]),
            headers=user_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_invalid_identifier_url(self, client, admin_headers, sample_author):
        response = client.post(
            "/api/v1/books/",
            json=book_data([sample_author.id], identifier_url="openlibrary"),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY


class TestUpdateBook:
    """Tests for PUT and PATCH /api/v1/books/{book_id}."""

    def test_replace_book_and_authors(self, client, admin_headers, sample_book, second_author):
        response = client.put(
            f"/api/v1/books/{sample_book.id}",
            json=book_data([second_author.id]),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Labyrinths"
        assert [a["id"] for a in data["authors"]] == [second_author.id]

    def test_patch_title_keeps_authors(self, client, admin_headers, sample_book, sample_author):
        response = client.patch(
            f"/api/v1/books/{sample_book.id}",
            json={"title": "Fictions"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["title"] == "Fictions"
        assert [a["id"] for a in data["authors"]] == [sample_author.id]

    def test_patch_authors(self, client, admin_headers, db_session, sample_book, sample_author):
        other = make_author(db_session, "Silvina", "Ocampo", date(1903, 7, 28))

        response = client.patch(
            f"/api/v1/books/{sample_book.id}",
            json={"author_ids": [sample_author.id, other.id]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert sorted(a["id"] for a in response.json()["authors"]) == sorted([sample_author.id, other.id])

    def test_patch_empty_authors(self, client, admin_headers, sample_book):
        response = client.patch(
            f"/api/v1/books/{sample_book.id}",
            json={"author_ids": []},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_empty_patch(self, client, admin_headers, sample_book):
        response = client.patch(f"/api/v1/books/{sample_book.id}", json={}, headers=admin_headers)

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestDeleteBook:
    """Tests for DELETE /api/v1/books/{book_id}."""

    def test_delete_book(self, client, admin_headers, sample_book, sample_author):
        response = client.delete(f"/api/v1/books/{sample_book.id}", headers=admin_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert client.get(f"/api/v1/books/{sample_book.id}").status_code == 404
        assert client.get(f"/api/v1/authors/{sample_author.id}").json()["books"] == []

    def test_delete_requires_token(self, client, sample_book):
        response = client.delete(f"/api/v1/books/{sample_book.id}")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
