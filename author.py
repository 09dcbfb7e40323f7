from __future__ import annotations

from datetime import date

from utils.dates import format_display, parse_iso_date, to_iso


class Author:
    """A person credited with one or more books in the catalog."""

    collection = "authors"
    fields = ("first_name", "family_name", "date_of_birth", "date_of_death")
    references: dict = {}

    def __init__(self, first_name: str, family_name: str, date_of_birth: date | None = None,
                 date_of_death: date | None = None, id: str | None = None) -> None:
        self.id = id
        self.first_name = first_name
        self.family_name = family_name
        self.date_of_birth = date_of_birth
        self.date_of_death = date_of_death

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return self.name

    @property
    def url(self) -> str:
        return f"/catalog/authors/{self.id}"

    @property
    def name(self) -> str:
        """Full name as 'family_name, first_name'; empty when either part is missing."""
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self) -> str:
        born = format_display(self.date_of_birth)
        died = format_display(self.date_of_death)
        if not born and not died:
            return ""
        return f"{born} - {died}"

    @property
    def date_of_birth_formatted(self) -> str:
        return format_display(self.date_of_birth)

    @property
    def date_of_death_formatted(self) -> str:
        return format_display(self.date_of_death)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "family_name": self.family_name,
            "date_of_birth": to_iso(self.date_of_birth),
            "date_of_death": to_iso(self.date_of_death),
        }

    @staticmethod
    def from_dict(data: dict) -> "Author":
        return Author(
            first_name=data.get("first_name") or "",
            family_name=data.get("family_name") or "",
            date_of_birth=parse_iso_date(data.get("date_of_birth")),
            date_of_death=parse_iso_date(data.get("date_of_death")),
            id=data.get("id"),
        )
