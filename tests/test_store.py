import asyncio
from datetime import date

import pytest

from author import Author
from book import Book
from bookinstance import BookInstance
from errors import CatalogError, ErrorKind
from store import gather


def run(coro):
    return asyncio.run(coro)


def test_create_and_find_by_id(store):
    author = run(store.create(Author("Isaac", "Asimov", date(1920, 1, 2), date(1992, 4, 6))))
    assert author.id

    found = run(store.find_by_id(Author, author.id))
    assert found.first_name == "Isaac"
    assert found.date_of_birth == date(1920, 1, 2)
    assert found.date_of_death == date(1992, 4, 6)
    assert found.url == f"/catalog/authors/{author.id}"


def test_find_by_id_missing_returns_none(store):
    assert run(store.find_by_id(Author, "does-not-exist")) is None


def test_find_sorted_ascending(store):
    for first, family in [("Ben", "Bova"), ("Isaac", "Asimov"), ("Patrick", "Rothfuss")]:
        run(store.create(Author(first, family)))

    authors = run(store.find(Author, sort=[("family_name", "ascending")]))
    assert [a.family_name for a in authors] == ["Asimov", "Bova", "Rothfuss"]

    authors = run(store.find(Author, sort=[("family_name", "descending")]))
    assert [a.family_name for a in authors] == ["Rothfuss", "Bova", "Asimov"]


def test_find_with_filter_and_projection(store):
    asimov = run(store.create(Author("Isaac", "Asimov")))
    bova = run(store.create(Author("Ben", "Bova")))
    run(store.create(Book("Foundation", asimov.id, "Psychohistory.", "9780553293357")))
    run(store.create(Book("Death Wave", bova.id, "Sequel.", "9780765379504")))

    books = run(store.find(Book, {"author": asimov.id}, projection=("title",)))
    assert len(books) == 1
    assert books[0].title == "Foundation"
    assert books[0].id
    assert books[0].summary is None


def test_populate_resolves_book(store):
    author = run(store.create(Author("Isaac", "Asimov")))
    book = run(store.create(Book("Foundation", author.id)))
    copy = run(store.create(BookInstance(book.id, "Gnome Press, 1951.", "Loaned", date(2024, 1, 31))))

    found = run(store.find_by_id(BookInstance, copy.id, populate=("book",)))
    assert isinstance(found.book, Book)
    assert found.book.title == "Foundation"
    assert found.book_id == book.id
    assert found.due_back == date(2024, 1, 31)

    plain = run(store.find_by_id(BookInstance, copy.id))
    assert plain.book == book.id


def test_update_by_id_replaces_fields(store):
    author = run(store.create(Author("Jane", "Austen")))
    replacement = Author("Janet", "Austin", date(1775, 12, 16))

    updated = run(store.update_by_id(author.id, replacement))
    assert updated.id == author.id

    found = run(store.find_by_id(Author, author.id))
    assert (found.first_name, found.family_name, found.date_of_birth) == ("Janet", "Austin", date(1775, 12, 16))


def test_update_missing_returns_none(store):
    assert run(store.update_by_id("nope", Author("A", "B"))) is None


def test_delete_by_id(store):
    author = run(store.create(Author("Jane", "Austen")))
    assert run(store.delete_by_id(Author, author.id)) is True
    assert run(store.delete_by_id(Author, author.id)) is False
    assert run(store.count(Author)) == 0


def test_count_with_filter(store):
    author = run(store.create(Author("Isaac", "Asimov")))
    book = run(store.create(Book("Foundation", author.id)))
    run(store.create(BookInstance(book.id, "Imprint 1", "Available")))
    run(store.create(BookInstance(book.id, "Imprint 2", "Loaned")))

    assert run(store.count(BookInstance)) == 2
    assert run(store.count(BookInstance, {"status": "Available"})) == 1


def test_unknown_field_is_rejected(store):
    with pytest.raises(ValueError):
        run(store.find(Author, {"nickname": "x"}))


def test_dangling_reference_is_a_store_failure(store):
    with pytest.raises(CatalogError) as excinfo:
        run(store.create(BookInstance("missing-book", "Imprint", "Available")))
    assert excinfo.value.kind is ErrorKind.STORE_FAILURE
    assert excinfo.value.status_code == 500


def test_gather_returns_results_in_order(store):
    author = run(store.create(Author("Isaac", "Asimov")))

    async def both():
        return await gather(store.find_by_id(Author, author.id), store.count(Author))

    found, count = run(both())
    assert found.id == author.id
    assert count == 1


def test_gather_fails_on_first_error(store):
    async def boom():
        raise CatalogError.store_failure("disk on fire")

    async def both():
        return await gather(store.count(Author), boom())

    with pytest.raises(CatalogError, match="disk on fire"):
        run(both())
