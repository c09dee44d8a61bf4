"""Update Book — PUT /books/{id} partial updates.

Invariants:
    - Only fields present in the body change; others stay as stored
    - Present-but-invalid fields → 400 with the update-flavoured message
    - published=0 is a legitimate update
    - Missing or non-numeric id → 500 "Failed to update book"
"""

import pytest

from bookshelf.core.validate_book import (
    AUTHOR_INVALID, PUBLISHED_INVALID, TITLE_INVALID,
)


async def test_update_author_only_leaves_other_fields(client, seed_book):
    res = await client.put(f"/books/{seed_book.id}", json={"author": "New Author"})
    assert res.status_code == 200
    assert res.json() == {
        "id": seed_book.id,
        "title": "Dune",
        "author": "New Author",
        "published": 1965,
    }

    stored = (await client.get(f"/books/{seed_book.id}")).json()
    assert stored["author"] == "New Author"
    assert stored["title"] == "Dune"
    assert stored["published"] == 1965


async def test_update_trims_strings(client, seed_book):
    res = await client.put(
        f"/books/{seed_book.id}", json={"title": "  Dune Messiah  "},
    )
    assert res.status_code == 200
    assert res.json()["title"] == "Dune Messiah"


async def test_update_published_to_zero(client, seed_book):
    res = await client.put(f"/books/{seed_book.id}", json={"published": 0})
    assert res.status_code == 200
    assert res.json()["published"] == 0


async def test_update_all_fields(client, seed_book):
    res = await client.put(
        f"/books/{seed_book.id}",
        json={"title": "Children of Dune", "author": "F. Herbert", "published": 1976},
    )
    assert res.status_code == 200
    assert res.json() == {
        "id": seed_book.id,
        "title": "Children of Dune",
        "author": "F. Herbert",
        "published": 1976,
    }


async def test_update_empty_body_returns_current_record(client, seed_book):
    res = await client.put(f"/books/{seed_book.id}", json={})
    assert res.status_code == 200
    assert res.json()["title"] == "Dune"


@pytest.mark.parametrize("body,message", [
    ({"title": ""}, TITLE_INVALID),
    ({"title": "   "}, TITLE_INVALID),
    ({"title": None}, TITLE_INVALID),
    ({"title": 1}, TITLE_INVALID),
    ({"author": ""}, AUTHOR_INVALID),
    ({"author": 3}, AUTHOR_INVALID),
    ({"published": 3.5}, PUBLISHED_INVALID),
    ({"published": "2020"}, PUBLISHED_INVALID),
    ({"published": False}, PUBLISHED_INVALID),
])
async def test_update_rejects_invalid_fields(client, seed_book, body, message):
    res = await client.put(f"/books/{seed_book.id}", json=body)
    assert res.status_code == 400
    assert res.json() == {"error": message}

    stored = (await client.get(f"/books/{seed_book.id}")).json()
    assert stored["title"] == "Dune"
    assert stored["author"] == "Frank Herbert"
    assert stored["published"] == 1965


async def test_update_missing_book_returns_500(client):
    res = await client.put("/books/999", json={"title": "Ghost"})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to update book"}


async def test_update_non_numeric_id_returns_500(client, seed_book):
    res = await client.put("/books/abc", json={"title": "Ghost"})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to update book"}


async def test_update_validation_runs_before_lookup(client):
    res = await client.put("/books/999", json={"title": ""})
    assert res.status_code == 400
    assert res.json() == {"error": TITLE_INVALID}


async def test_update_gateway_failure(client, failing_books):
    res = await client.put("/books/1", json={"title": "T"})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to update book"}
    assert failing_books.calls == ["update"]


@pytest.mark.parametrize("raw_id", ["0_1", "١"])
async def test_update_malformed_id_never_touches_existing_book(client, seed_book, raw_id):
    assert seed_book.id == 1
    res = await client.put(f"/books/{raw_id}", json={"title": "Hijacked"})
    assert res.status_code == 500
    assert res.json() == {"error": "Failed to update book"}
    assert (await client.get("/books/1")).json()["title"] == "Dune"
