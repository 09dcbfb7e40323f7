import logging
from datetime import date

from author import Author
from book import Book
from bookinstance import BookInstance
from store import DocumentStore

logger = logging.getLogger(__name__)

SAMPLE_AUTHORS = [
    ("Patrick", "Rothfuss", date(1973, 6, 6), None),
    ("Ben", "Bova", date(1932, 11, 8), None),
    ("Isaac", "Asimov", date(1920, 1, 2), date(1992, 4, 6)),
    ("Bob", "Billings", None, None),
    ("Jim", "Jones", date(1971, 12, 16), None),
]

# (title, author index, summary, isbn)
SAMPLE_BOOKS = [
    ("The Name of the Wind (The Kingkiller Chronicle, #1)", 0,
     "I have stolen princesses back from sleeping barrow kings. I burned down the town of Trebon.",
     "9781473211896"),
    ("The Wise Man's Fear (The Kingkiller Chronicle, #2)", 0,
     "Picking up the tale of Kvothe Kingkiller once again, we follow him into exile.",
     "9788401352836"),
    ("The Slow Regard of Silent Things (Kingkiller Chronicle)", 0,
     "Deep below the University, there is a dark place.", "9780756411336"),
    ("Apes and Angels", 1,
     "Humankind headed out to the stars not for conquest, nor exploration, nor even for curiosity.",
     "9780765379528"),
    ("Death Wave", 1,
     "In Ben Bova's previous novel New Earth, Jordan Kell led the first human mission beyond the solar system.",
     "9780765379504"),
]

# (book index, imprint, status, due_back)
SAMPLE_COPIES = [
    (0, "London Gollancz, 2014.", "Available", None),
    (1, "Gollancz, 2011.", "Loaned", date(2020, 10, 20)),
    (2, "Gollancz, 2015.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (3, "New York Tom Doherty Associates, 2016.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Available", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Maintenance", None),
    (4, "New York, NY Tom Doherty Associates, LLC, 2015.", "Loaned", None),
    (0, "Imprint XXX2", "Available", None),
    (1, "Imprint XXX3", "Available", None),
]


async def seed_catalog(store: DocumentStore) -> int:
    """Insert the sample catalog. Returns the number of records created (0 if authors already exist)."""
    if await store.count(Author) > 0:
        logger.info("Catalog already has authors, skipping seed")
        return 0

    authors = []
    for first_name, family_name, born, died in SAMPLE_AUTHORS:
        authors.append(await store.create(Author(first_name, family_name, born, died)))

    books = []
    for title, author_index, summary, isbn in SAMPLE_BOOKS:
        books.append(await store.create(Book(title, authors[author_index].id, summary, isbn)))

    copies = 0
    for book_index, imprint, status, due_back in SAMPLE_COPIES:
        await store.create(BookInstance(books[book_index].id, imprint, status, due_back))
        copies += 1

    total = len(authors) + len(books) + copies
    logger.info(f"Seeded {len(authors)} authors, {len(books)} books and {copies} copies")
    return total
