from __future__ import annotations


class Book:
    """A catalog title. Copies of it are tracked as BookInstance records."""

    collection = "books"
    fields = ("title", "author", "summary", "isbn")
    references: dict = {}

    def __init__(self, title: str, author: str, summary: str | None = None, isbn: str | None = None,
                 id: str | None = None) -> None:
        self.id = id
        self.title = title.strip() if title else ""
        self.author = author
        self.summary = summary
        self.isbn = isbn.strip() if isbn else isbn

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} (ISBN: {self.isbn})"

    @property
    def url(self) -> str:
        return f"/catalog/books/{self.id}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "author": self.author,
            "summary": self.summary,
            "isbn": self.isbn,
        }

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            title=data.get("title") or "",
            author=data.get("author"),
            summary=data.get("summary"),
            isbn=data.get("isbn"),
            id=data.get("id"),
        )
