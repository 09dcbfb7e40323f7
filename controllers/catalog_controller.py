from author import Author
from book import Book
from bookinstance import BookInstance
from store import DocumentStore, gather
from templates import render


async def catalog_index(store: DocumentStore):
    """Home page with record counts."""
    book_count, copy_count, available_count, author_count = await gather(
        store.count(Book),
        store.count(BookInstance),
        store.count(BookInstance, {"status": "Available"}),
        store.count(Author),
    )
    return render(
        "index",
        title="Local Library Home",
        data={
            "book_count": book_count,
            "book_instance_count": copy_count,
            "book_instance_available_count": available_count,
            "author_count": author_count,
        },
    )
