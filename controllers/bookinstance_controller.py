"""
BookInstance (book copy) handlers.

Same shape as the author handlers, with two differences worth knowing:
copies always show their book populated, and deleting a copy has no
reference guard.
"""

import logging
from typing import Any, Mapping

from book import Book
from bookinstance import STATUS_VALUES, BookInstance
from controllers.author_controller import redirect
from errors import CatalogError
from store import DocumentStore, gather
from templates import render
from utils.validators import BOOKINSTANCE_RULES, BOOKINSTANCE_SANITIZERS, run_validation

logger = logging.getLogger(__name__)

BOOKINSTANCE_LIST_URL = "/catalog/bookinstances"


def _bookinstance_from_values(values: Mapping[str, Any], instance_id=None) -> BookInstance:
    return BookInstance(
        book=values["book"],
        imprint=values["imprint"],
        status=values["status"],
        due_back=values["due_back"],
        id=instance_id,
    )


async def _book_choices(store: DocumentStore):
    return await store.find(Book, projection=("title",), sort=[("title", "ascending")])


# ------------------------- Read ------------------------- #
async def bookinstance_list(store: DocumentStore):
    instances = await store.find(BookInstance, populate=("book",))
    return render("bookinstance_list", title="Book Instance List", bookinstance_list=instances)


async def bookinstance_detail(store: DocumentStore, instance_id: str):
    instance = await store.find_by_id(BookInstance, instance_id, populate=("book",))
    if instance is None:
        logger.warning(f"Book copy {instance_id} not found")
        raise CatalogError.not_found("Book copy not found", bookinstance_id=instance_id)
    return render("bookinstance_detail", title=f"Copy: {instance.book.title}", bookinstance=instance)


# ------------------------- Create ------------------------- #
async def bookinstance_create_get(store: DocumentStore):
    books = await _book_choices(store)
    return render("bookinstance_form", title="Create BookInstance", book_list=books,
                  statuses=STATUS_VALUES, bookinstance=None, selected_book=None)


async def bookinstance_create_post(store: DocumentStore, form: Mapping[str, Any]):
    result = run_validation(form, BOOKINSTANCE_RULES, BOOKINSTANCE_SANITIZERS)
    instance = _bookinstance_from_values(result.values)

    if not result.is_valid:
        books = await _book_choices(store)
        return render("bookinstance_form", title="Create BookInstance", book_list=books,
                      statuses=STATUS_VALUES, bookinstance=instance, selected_book=instance.book_id,
                      errors=result.errors)

    await store.create(instance)
    return redirect(instance.url)


# ------------------------- Delete ------------------------- #
async def bookinstance_delete_get(store: DocumentStore, instance_id: str):
    instance = await store.find_by_id(BookInstance, instance_id, populate=("book",))
    if instance is None:
        return redirect(BOOKINSTANCE_LIST_URL)
    return render("bookinstance_delete", title="Delete Copy", bookinstance=instance)


async def bookinstance_delete_post(store: DocumentStore, form: Mapping[str, Any]):
    """Delete a copy by the submitted id. Copies are never referenced, so there is no guard."""
    instance_id = (form.get("copyid") or "").strip()
    await store.delete_by_id(BookInstance, instance_id)
    return redirect(BOOKINSTANCE_LIST_URL)


# ------------------------- Update ------------------------- #
async def bookinstance_update_get(store: DocumentStore, instance_id: str):
    instance, books = await gather(
        store.find_by_id(BookInstance, instance_id, populate=("book",)),
        _book_choices(store),
    )
    if instance is None:
        logger.warning(f"Book copy {instance_id} not found")
        raise CatalogError.not_found("Copy not found", bookinstance_id=instance_id)
    return render("bookinstance_form", title="Update Copy", book_list=books, statuses=STATUS_VALUES,
                  bookinstance=instance, selected_book=instance.book_id)


async def bookinstance_update_post(store: DocumentStore, instance_id: str, form: Mapping[str, Any]):
    result = run_validation(form, BOOKINSTANCE_RULES, BOOKINSTANCE_SANITIZERS)
    instance = _bookinstance_from_values(result.values, instance_id=instance_id)

    if not result.is_valid:
        books = await _book_choices(store)
        return render("bookinstance_form", title="Update Copy", book_list=books, statuses=STATUS_VALUES,
                      bookinstance=instance, selected_book=instance.book_id, errors=result.errors)

    updated = await store.update_by_id(instance_id, instance)
    if updated is None:
        raise CatalogError.not_found("Copy not found", bookinstance_id=instance_id)
    return redirect(updated.url)
