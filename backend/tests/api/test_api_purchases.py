"""HTTP tests for catalog, purchase and ownership endpoints."""

from __future__ import annotations

from tests.factories.book import BookFactory
from tests.factories.user import UserFactory


def test_buy_requires_token(client, session) -> None:
    book = BookFactory()

    resp = client.post("/api/v1/purchases", json={"book_id": book.id})

    assert resp.status_code == 401


def test_buy_then_list_owned_books(client, session, auth_header) -> None:
    user = UserFactory(balance=500)
    book = BookFactory(title="Snow Crash", price=200)
    headers = auth_header(user.id)

    resp = client.post("/api/v1/purchases", json={"book_id": book.id}, headers=headers)

    assert resp.status_code == 201
    assert resp.get_json()["data"] == {"purchased": True, "user_id": user.id, "book_id": book.id}

    owned = client.get("/api/v1/users/me/books", headers=headers).get_json()["data"]
    assert [(o["book_id"], o["title"]) for o in owned] == [(book.id, "Snow Crash")]

    ledger = client.get("/api/v1/users/me/transactions", headers=headers).get_json()["data"]
    assert [(t["action"], t["amount"]) for t in ledger] == [("BUY", 200)]

    me = client.get(f"/api/v1/users/{user.id}", headers=headers).get_json()["data"]
    assert me["balance"] == 300


def test_buy_with_insufficient_balance(client, session, auth_header) -> None:
    user = UserFactory(balance=10)
    book = BookFactory(price=200)

    resp = client.post(
        "/api/v1/purchases", json={"book_id": book.id}, headers=auth_header(user.id)
    )

    assert resp.status_code == 412
    body = resp.get_json()
    assert body["code"] == "precondition_failed"
    assert body["detail"] == "Insufficient balance"


def test_buy_unknown_book(client, session, auth_header) -> None:
    user = UserFactory(balance=10)

    resp = client.post("/api/v1/purchases", json={"book_id": 999}, headers=auth_header(user.id))

    assert resp.status_code == 404
    assert resp.get_json()["detail"] == "Book not found"


def test_buy_failure_hides_internal_details(client, session, auth_header, monkeypatch) -> None:
    from bookshop.repositories.ledger import TransactionRepository

    user = UserFactory(balance=500)
    book = BookFactory(price=100)

    def _boom(self, instance):
        raise RuntimeError("constraint xyz exploded at /var/lib/db")

    monkeypatch.setattr(TransactionRepository, "add", _boom)

    resp = client.post("/api/v1/purchases", json={"book_id": book.id}, headers=auth_header(user.id))

    assert resp.status_code == 500
    body = resp.get_json()
    assert body["detail"] == "Failed to execute buy"
    assert "exploded" not in resp.get_data(as_text=True)


def test_get_book(client, session) -> None:
    book = BookFactory(title="Hyperion", author="Dan Simmons", price=750)

    resp = client.get(f"/api/v1/books/{book.id}")

    assert resp.status_code == 200
    assert resp.get_json()["data"] == {
        "id": book.id,
        "title": "Hyperion",
        "author": "Dan Simmons",
        "price": 750,
    }


def test_get_missing_book(client, session) -> None:
    assert client.get("/api/v1/books/4242").status_code == 404
