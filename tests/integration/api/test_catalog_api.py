"""End-to-end tests of the catalog HTTP API."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from src.bookshelf.api.http.app import create_app
from src.bookshelf.entities import BookRepository
from src.bookshelf.runtime.config.config_data import ConfigData

PREFIX = "/api/go"

JULES = {
    "name": "Jules",
    "surname": "Verne",
    "biography": "...",
    "birthday": "1828-02-08",
}


def book_payload(title: str = "A", authorid: int | None = None) -> dict:
    return {"title": title, "authorid": authorid, "isbn": "978-0-14-044921-1", "year": 1870}


def create_author(client: TestClient, **overrides) -> dict:
    response = client.post(f"{PREFIX}/authors", json={**JULES, **overrides})
    assert response.status_code == 200
    return response.json()


def create_book(client: TestClient, **overrides) -> dict:
    response = client.post(f"{PREFIX}/books", json={**book_payload(), **overrides})
    assert response.status_code == 200
    return response.json()


class TestAuthorEndpoints:
    """CRUD over /authors."""

    def test_create_then_fetch_returns_same_values(self, client: TestClient):
        created = create_author(client)

        response = client.get(f"{PREFIX}/authors/{created['id']}")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/json"
        assert response.json() == {"id": created["id"], **JULES}

    def test_list_in_insertion_order(self, client: TestClient):
        ids = [create_author(client, name=name)["id"] for name in ("A", "B", "C")]

        response = client.get(f"{PREFIX}/authors")

        assert response.status_code == 200
        assert [a["id"] for a in response.json()] == ids

    def test_list_empty(self, client: TestClient):
        response = client.get(f"{PREFIX}/authors")
        assert response.status_code == 200
        assert response.json() == []

    def test_update(self, client: TestClient):
        created = create_author(client)

        response = client.put(
            f"{PREFIX}/authors/{created['id']}", json={**JULES, "biography": "Novelist."}
        )

        assert response.status_code == 200
        assert response.json()["biography"] == "Novelist."
        assert client.get(f"{PREFIX}/authors/{created['id']}").json()["biography"] == "Novelist."

    def test_update_missing(self, client: TestClient):
        response = client.put(f"{PREFIX}/authors/999", json=JULES)
        assert response.status_code == 404

    def test_get_missing(self, client: TestClient):
        response = client.get(f"{PREFIX}/authors/999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Author not found"}

    def test_delete(self, client: TestClient):
        created = create_author(client)

        response = client.delete(f"{PREFIX}/authors/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"message": "Author deleted successfully"}
        assert client.get(f"{PREFIX}/authors/{created['id']}").status_code == 404
        assert client.get(f"{PREFIX}/authors").json() == []

    def test_delete_missing_is_not_found(self, client: TestClient):
        assert client.delete(f"{PREFIX}/authors/999").status_code == 404

    def test_delete_does_not_cascade_to_books(self, client: TestClient):
        author = create_author(client)
        book = create_book(client, authorid=author["id"])

        client.delete(f"{PREFIX}/authors/{author['id']}")

        response = client.get(f"{PREFIX}/books/{book['id']}")
        assert response.status_code == 200
        assert response.json()["authorid"] == author["id"]


class TestBookEndpoints:
    """CRUD over /books."""

    def test_create_then_fetch(self, client: TestClient):
        created = create_book(client, authorid=1)

        response = client.get(f"{PREFIX}/books/{created['id']}")

        assert response.status_code == 200
        assert response.json() == {"id": created["id"], **book_payload(authorid=1)}

    def test_string_year_and_author_reference_are_coerced(self, client: TestClient):
        created = create_book(client, year="1870", authorid="1")
        assert created["year"] == 1870
        assert created["authorid"] == 1

    def test_list_reflects_each_change_once(self, client: TestClient):
        first = create_book(client, title="first")
        second = create_book(client, title="second")
        client.put(f"{PREFIX}/books/{first['id']}", json=book_payload(title="first-edited"))
        client.delete(f"{PREFIX}/books/{second['id']}")
        third = create_book(client, title="third")

        listed = client.get(f"{PREFIX}/books").json()

        assert [(b["id"], b["title"]) for b in listed] == [
            (first["id"], "first-edited"),
            (third["id"], "third"),
        ]

    def test_update_missing(self, client: TestClient):
        assert client.put(f"{PREFIX}/books/999", json=book_payload()).status_code == 404

    def test_delete(self, client: TestClient):
        created = create_book(client)
        response = client.delete(f"{PREFIX}/books/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"message": "Book deleted successfully"}

    def test_delete_missing_is_not_found(self, client: TestClient):
        assert client.delete(f"{PREFIX}/books/999").status_code == 404

    def test_identifiers_not_reused(self, client: TestClient):
        first = create_book(client)
        client.delete(f"{PREFIX}/books/{first['id']}")
        second = create_book(client)
        assert second["id"] > first["id"]


class TestInputRejection:
    """Malformed input is rejected with 400 instead of proceeding with defaults."""

    def test_malformed_json(self, client: TestClient):
        response = client.post(
            f"{PREFIX}/authors",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "request_id" in response.json()

    def test_missing_fields(self, client: TestClient):
        response = client.post(f"{PREFIX}/authors", json={"name": "Jules"})
        assert response.status_code == 400
        assert client.get(f"{PREFIX}/authors").json() == []

    def test_invalid_birthday(self, client: TestClient):
        response = client.post(f"{PREFIX}/authors", json={**JULES, "birthday": "08.02.1828"})
        assert response.status_code == 400

    def test_invalid_isbn(self, client: TestClient):
        response = client.post(f"{PREFIX}/books", json={**book_payload(), "isbn": "12-34"})
        assert response.status_code == 400

    def test_year_out_of_range(self, client: TestClient):
        response = client.post(f"{PREFIX}/books", json={**book_payload(), "year": 12000})
        assert response.status_code == 400

    def test_non_numeric_identifier(self, client: TestClient):
        assert client.get(f"{PREFIX}/books/abc").status_code == 400


class TestJointUpdateEndpoint:
    """PUT /books/{book_id}/authors/{author_id}."""

    def _seed(self, client: TestClient) -> tuple[dict, dict]:
        author = create_author(client)
        book = create_book(client, title="A", authorid=author["id"])
        return book, author

    def test_updates_both(self, client: TestClient):
        book, author = self._seed(client)
        payload = {
            "book": book_payload(title="B", authorid=author["id"]),
            "author": {**JULES, "name": "Jules Gabriel"},
        }

        response = client.put(f"{PREFIX}/books/{book['id']}/authors/{author['id']}", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["book"] == {"id": book["id"], **payload["book"]}
        assert body["author"] == {"id": author["id"], **payload["author"]}
        assert client.get(f"{PREFIX}/books/{book['id']}").json()["title"] == "B"
        assert client.get(f"{PREFIX}/authors/{author['id']}").json()["name"] == "Jules Gabriel"

    def test_missing_author_leaves_book_unchanged(self, client: TestClient):
        book, _ = self._seed(client)
        payload = {"book": book_payload(title="B"), "author": JULES}

        response = client.put(f"{PREFIX}/books/{book['id']}/authors/999", json=payload)

        assert response.status_code == 404
        assert response.json() == {"detail": "Author 999 not found"}
        assert client.get(f"{PREFIX}/books/{book['id']}").json()["title"] == "A"

    def test_missing_book(self, client: TestClient):
        _, author = self._seed(client)
        payload = {"book": book_payload(title="B"), "author": {**JULES, "name": "X"}}

        response = client.put(f"{PREFIX}/books/999/authors/{author['id']}", json=payload)

        assert response.status_code == 404
        assert client.get(f"{PREFIX}/authors/{author['id']}").json()["name"] == "Jules"

    def test_partial_body_rejected(self, client: TestClient):
        book, author = self._seed(client)
        response = client.put(
            f"{PREFIX}/books/{book['id']}/authors/{author['id']}",
            json={"book": book_payload(title="B")},
        )
        assert response.status_code == 400
        assert client.get(f"{PREFIX}/books/{book['id']}").json()["title"] == "A"

    def test_store_failure_is_500(self, client: TestClient, monkeypatch):
        book, author = self._seed(client)

        def fail(*args, **kwargs):
            raise OperationalError("UPDATE", {}, Exception("connection lost"))

        monkeypatch.setattr(BookRepository, "update", fail)
        payload = {"book": book_payload(title="B"), "author": JULES}

        response = client.put(f"{PREFIX}/books/{book['id']}/authors/{author['id']}", json=payload)

        assert response.status_code == 500
        monkeypatch.undo()
        assert client.get(f"{PREFIX}/books/{book['id']}").json()["title"] == "A"


class TestJointUpdateVerification:
    """With catalog.verify_book_author on, mismatched authors are refused."""

    @pytest.fixture
    def verifying_client(self, test_config: ConfigData):
        test_config.catalog.verify_book_author = True
        with TestClient(create_app(test_config)) as test_client:
            yield test_client

    def test_mismatched_author_is_conflict(self, verifying_client: TestClient):
        author = create_author(verifying_client)
        other = create_author(verifying_client, name="Herbert")
        book = create_book(verifying_client, authorid=author["id"])

        response = verifying_client.put(
            f"{PREFIX}/books/{book['id']}/authors/{other['id']}",
            json={"book": book_payload(title="B"), "author": JULES},
        )

        assert response.status_code == 409
        assert verifying_client.get(f"{PREFIX}/books/{book['id']}").json()["title"] == "A"

    def test_matching_author_accepted(self, verifying_client: TestClient):
        author = create_author(verifying_client)
        book = create_book(verifying_client, authorid=author["id"])

        response = verifying_client.put(
            f"{PREFIX}/books/{book['id']}/authors/{author['id']}",
            json={"book": book_payload(title="B", authorid=author["id"]), "author": JULES},
        )

        assert response.status_code == 200


class TestFailureIsolation:
    """A failing query is reported as 500 and the service keeps running."""

    def test_store_error_on_read_path(self, client: TestClient, monkeypatch):
        create_book(client)

        def fail(self):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(BookRepository, "list_all", fail)
        response = client.get(f"{PREFIX}/books")

        assert response.status_code == 500
        assert response.json()["detail"] == "Internal Server Error"
        assert response.headers["X-Request-ID"] == response.json()["request_id"]

        monkeypatch.undo()
        assert client.get(f"{PREFIX}/books").status_code == 200
