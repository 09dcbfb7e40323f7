import asyncio
import importlib
from datetime import date

import pytest
from fastapi.testclient import TestClient

from author import Author
from book import Book
from bookinstance import BookInstance
from store import DocumentStore


@pytest.fixture
def store(tmp_path, request):
    # Unique database file per test
    db_file = str(tmp_path / f"test_{request.node.name}.db")
    return DocumentStore(db_file)


@pytest.fixture
def api_module(tmp_path, request, monkeypatch):
    # Point the app at a per-test DB, then reload api so its module-level store uses it
    db_file = str(tmp_path / f"api_test_{request.node.name}.db")
    monkeypatch.setenv("LIBRARY_DB_FILE", db_file)

    import api
    return importlib.reload(api)


@pytest.fixture
def client(api_module):
    return TestClient(api_module.app)


@pytest.fixture
def app_store(api_module) -> DocumentStore:
    """The store the reloaded app is using, for seeding and assertions."""
    return api_module.store


@pytest.fixture
def make_author(app_store):
    def _make(first_name="Jane", family_name="Austen", date_of_birth=None, date_of_death=None):
        author = Author(first_name, family_name, date_of_birth, date_of_death)
        return asyncio.run(app_store.create(author))
    return _make


@pytest.fixture
def make_book(app_store):
    def _make(author, title="Persuasion", summary="A late novel.", isbn="9780141439686"):
        return asyncio.run(app_store.create(Book(title, author.id, summary, isbn)))
    return _make


@pytest.fixture
def make_copy(app_store):
    def _make(book, imprint="Penguin Classics, 2003.", status="Available", due_back=None):
        return asyncio.run(app_store.create(BookInstance(book.id, imprint, status, due_back)))
    return _make


@pytest.fixture
def sample_dates():
    return date(1775, 12, 16), date(1817, 7, 18)
