from __future__ import annotations

from datetime import date

from book import Book
from utils.dates import format_display, parse_iso_date, to_iso

# Keep in sync with the CHECK constraint on bookinstances.status
STATUS_VALUES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_STATUS = "Maintenance"


class BookInstance:
    """A physical copy of a Book that can be borrowed."""

    collection = "bookinstances"
    fields = ("book", "imprint", "status", "due_back")
    references = {"book": Book}

    def __init__(self, book: str | Book, imprint: str, status: str = DEFAULT_STATUS,
                 due_back: date | None = None, id: str | None = None) -> None:
        self.id = id
        # Either the referenced book id or, once populated, the Book itself
        self.book = book
        self.imprint = imprint
        self.status = status
        self.due_back = due_back

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.imprint} [{self.status}]"

    @property
    def url(self) -> str:
        return f"/catalog/bookinstances/{self.id}"

    @property
    def book_id(self) -> str | None:
        if isinstance(self.book, Book):
            return self.book.id
        return self.book

    @property
    def due_back_formatted(self) -> str:
        return format_display(self.due_back)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "book": self.book_id,
            "imprint": self.imprint,
            "status": self.status,
            "due_back": to_iso(self.due_back),
        }

    @staticmethod
    def from_dict(data: dict) -> "BookInstance":
        return BookInstance(
            book=data.get("book"),
            imprint=data.get("imprint") or "",
            status=data.get("status") or DEFAULT_STATUS,
            due_back=parse_iso_date(data.get("due_back")),
            id=data.get("id"),
        )
