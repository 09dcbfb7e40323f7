"""
Author handlers: list, detail, create, update and delete.

Each handler receives the document store plus the route/form parameters it
needs and returns a response. Store failures and NotFound conditions are
raised as CatalogError for the application's error handler.
"""

import logging
from typing import Any, Mapping

from fastapi.responses import RedirectResponse

from author import Author
from book import Book
from errors import CatalogError
from store import DocumentStore, gather
from templates import render
from utils.validators import AUTHOR_RULES, AUTHOR_SANITIZERS, run_validation

logger = logging.getLogger(__name__)

AUTHOR_LIST_URL = "/catalog/authors"


def redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=302)


def _author_from_values(values: Mapping[str, Any], author_id=None) -> Author:
    return Author(
        first_name=values["first_name"],
        family_name=values["family_name"],
        date_of_birth=values["date_of_birth"],
        date_of_death=values["date_of_death"],
        id=author_id,
    )


# ------------------------- Read ------------------------- #
async def author_list(store: DocumentStore):
    """Display list of all authors, sorted by family name."""
    authors = await store.find(Author, sort=[("family_name", "ascending")])
    return render("author_list", title="Author List", author_list=authors)


async def author_detail(store: DocumentStore, author_id: str):
    """Display the detail page of one author together with their books."""
    author, author_books = await gather(
        store.find_by_id(Author, author_id),
        store.find(Book, {"author": author_id}, projection=("title", "summary")),
    )
    if author is None:
        logger.warning(f"Author {author_id} not found")
        raise CatalogError.not_found("Author not found", author_id=author_id)
    return render("author_detail", title="Author Detail", author=author, author_books=author_books)


# ------------------------- Create ------------------------- #
async def author_create_get():
    return render("author_form", title="Create Author", author=None)


async def author_create_post(store: DocumentStore, form: Mapping[str, Any]):
    result = run_validation(form, AUTHOR_RULES, AUTHOR_SANITIZERS)
    author = _author_from_values(result.values)

    if not result.is_valid:
        # Render the form again with the sanitized values and the error messages
        return render("author_form", title="Create Author", author=author, errors=result.errors)

    await store.create(author)
    return redirect(author.url)


# ------------------------- Delete ------------------------- #
async def author_delete_get(store: DocumentStore, author_id: str):
    author, author_books = await gather(
        store.find_by_id(Author, author_id),
        store.find(Book, {"author": author_id}),
    )
    if author is None:
        return redirect(AUTHOR_LIST_URL)
    return render("author_delete", title="Delete Author", author=author, author_books=author_books)


async def author_delete_post(store: DocumentStore, form: Mapping[str, Any]):
    """Delete an author unless books still reference them."""
    author_id = (form.get("authorid") or "").strip()
    author, author_books = await gather(
        store.find_by_id(Author, author_id),
        store.find(Book, {"author": author_id}),
    )

    if author_books:
        logger.info(f"Refusing to delete author {author_id}: {len(author_books)} book(s) reference it")
        return render("author_delete", title="Delete Author", author=author, author_books=author_books)

    await store.delete_by_id(Author, author_id)
    return redirect(AUTHOR_LIST_URL)


# ------------------------- Update ------------------------- #
async def author_update_get(store: DocumentStore, author_id: str):
    author = await store.find_by_id(Author, author_id)
    if author is None:
        logger.warning(f"Author {author_id} not found")
        raise CatalogError.not_found("Author not found", author_id=author_id)
    return render("author_form", title="Update Author", author=author)


async def author_update_post(store: DocumentStore, author_id: str, form: Mapping[str, Any]):
    result = run_validation(form, AUTHOR_RULES, AUTHOR_SANITIZERS)
    author = _author_from_values(result.values, author_id=author_id)

    if not result.is_valid:
        return render("author_form", title="Update Author", author=author, errors=result.errors)

    updated = await store.update_by_id(author_id, author)
    if updated is None:
        raise CatalogError.not_found("Author not found", author_id=author_id)
    return redirect(updated.url)
