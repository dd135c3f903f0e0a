import pytest

from booklend.errors import NotFound, ValidationError
from booklend.services.catalog_service import CatalogService


def test_create_sets_availability_from_copies(make_book):
    stocked = make_book(copies=2)
    empty = make_book(copies=0)

    assert stocked.id is not None
    assert stocked.available is True
    assert empty.available is False


def test_create_requires_fields(catalog):
    with pytest.raises(ValidationError) as exc:
        catalog.create({"title": "Only a title"})

    assert set(exc.value.errors) == {"author", "genre", "isbn", "copies"}


@pytest.mark.parametrize("field,value", [
    ("genre", "POETRY"),
    ("copies", -1),
    ("copies", "many"),
    ("copies", True),
    ("copies", "--3"),
    ("copies", "²"),
    ("title", "   "),
])
def test_create_rejects_bad_values(make_book, field, value):
    with pytest.raises(ValidationError) as exc:
        make_book(**{field: value})
    assert field in exc.value.errors


def test_duplicate_isbn_rejected(make_book, catalog):
    make_book(isbn="111")
    with pytest.raises(ValidationError) as exc:
        make_book(isbn="111")
    assert exc.value.errors["isbn"] == "ISBN must be unique"

    assert make_book(isbn="222").isbn == "222"
    assert len(catalog.books.find()) == 2


def test_get_missing_book(catalog):
    with pytest.raises(NotFound):
        catalog.get(9999)


def test_update_recomputes_availability(make_book, catalog):
    book = make_book(copies=2)

    catalog.update(book.id, {"copies": 0})
    assert catalog.get(book.id).available is False

    catalog.update(book.id, {"copies": 5, "title": "Renamed"})
    fresh = catalog.get(book.id)
    assert fresh.available is True
    assert fresh.copies == 5
    assert fresh.title == "Renamed"


def test_update_ignores_id_and_available(make_book, catalog):
    book = make_book(copies=0)
    catalog.update(book.id, {"id": 42, "available": True})

    fresh = catalog.get(book.id)
    assert fresh.id == book.id
    assert fresh.available is False


def test_update_isbn_uniqueness(make_book, catalog):
    first = make_book(isbn="A-1")
    second = make_book(isbn="B-2")

    # same isbn on the same book is not a conflict
    catalog.update(first.id, {"isbn": "A-1"})

    with pytest.raises(ValidationError) as exc:
        catalog.update(second.id, {"isbn": "A-1"})
    assert "isbn" in exc.value.errors
    assert catalog.get(second.id).isbn == "B-2"


def test_update_missing_and_invalid(make_book, catalog):
    with pytest.raises(NotFound):
        catalog.update(404, {"copies": 1})

    book = make_book(copies=1)
    with pytest.raises(ValidationError):
        catalog.update(book.id, {"copies": -3})
    assert catalog.get(book.id).copies == 1


def test_refresh_availability_is_idempotent(make_book, catalog):
    book = make_book(copies=1)
    book.copies = 0
    catalog.refresh_availability(book)
    catalog.refresh_availability(book)
    assert catalog.get(book.id).available is False


def test_delete(make_book, catalog):
    book = make_book()
    catalog.delete(book.id)

    with pytest.raises(NotFound):
        catalog.get(book.id)
    with pytest.raises(NotFound):
        catalog.delete(book.id)


def test_delete_block_policy(app, make_book, lending, future):
    book = make_book(copies=2)
    lending.borrow(book.id, 1, future)

    strict = CatalogService(delete_policy="block")
    with pytest.raises(ValidationError) as exc:
        strict.delete(book.id)
    assert "book" in exc.value.errors
    assert strict.get(book.id).id == book.id


def test_unknown_delete_policy():
    with pytest.raises(ValueError):
        CatalogService(delete_policy="cascade")


def test_list_by_genre_excludes_unavailable(make_book, catalog):
    shelf = make_book(genre="FANTASY", copies=2)
    make_book(genre="FANTASY", copies=0)
    make_book(genre="HISTORY", copies=4)

    assert [b.id for b in catalog.list_by_genre("FANTASY")] == [shelf.id]


def test_list_available(make_book, catalog):
    make_book(copies=1)
    make_book(copies=0)
    make_book(copies=7)

    assert all(b.available for b in catalog.list_available())
    assert len(catalog.list_available()) == 2


def test_list_sorts_and_limits(make_book, catalog):
    make_book(title="Bravo", copies=2)
    make_book(title="Alpha", copies=9)
    make_book(title="Charlie", copies=5)
    make_book(title="Delta", copies=0)

    asc = catalog.list(sort_by="title", sort="asc", limit=10)
    assert [b.title for b in asc] == ["Alpha", "Bravo", "Charlie"]

    desc = catalog.list(sort_by="copies", sort="desc", limit=2)
    assert [b.copies for b in desc] == [9, 5]


def test_list_filter_means_genre(make_book, catalog):
    make_book(genre="SCIENCE", copies=1)
    make_book(genre="HISTORY", copies=1)

    books = catalog.list(filter="SCIENCE")
    assert [b.genre for b in books] == ["SCIENCE"]


def test_list_unknown_sort_field_keeps_store_order(make_book, catalog):
    ids = [make_book().id for _ in range(3)]
    assert [b.id for b in catalog.list(sort_by="nope")] == ids


def test_list_default_limit(make_book, catalog):
    for _ in range(12):
        make_book()
    assert len(catalog.list()) == 10


@pytest.mark.parametrize("limit", ["ten", -1, "--1", "²"])
def test_list_bad_limit(catalog, limit):
    with pytest.raises(ValidationError):
        catalog.list(limit=limit)


def test_create_rejects_non_object(catalog):
    with pytest.raises(ValidationError) as exc:
        catalog.create([1, 2])
    assert exc.value.errors == {"body": "expected a JSON object"}


def test_list_accepts_numeric_text_limit(make_book, catalog):
    for _ in range(3):
        make_book()
    assert len(catalog.list(limit=" 2 ")) == 2
