import logging
import os
import sqlite3
from typing import Optional

from dotenv import load_dotenv

from config import settings

# Make sure .env is loaded before the environment is read below, whatever the import order.
load_dotenv()

logger = logging.getLogger(__name__)


def get_database_file() -> str:
    """Resolve the database file at call time.

    Priority:
    1) LIBRARY_DB_FILE (explicit override, used by the tests)
    2) LIBRARY_DATA_FILE (legacy name)
    3) settings.data_file
    """
    return (
        os.environ.get("LIBRARY_DB_FILE")
        or os.environ.get("LIBRARY_DATA_FILE")
        or settings.data_file
    )


def get_db_connection(db_file: Optional[str] = None) -> sqlite3.Connection:
    """Open a connection to the SQLite database with row access by column name."""
    conn = sqlite3.connect(db_file or get_database_file())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def create_tables(db_file: Optional[str] = None) -> None:
    """Create the catalog tables if they do not exist yet."""
    conn = get_db_connection(db_file)
    try:
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS authors (
                id TEXT PRIMARY KEY,
                first_name TEXT NOT NULL,
                family_name TEXT NOT NULL,
                date_of_birth TEXT,
                date_of_death TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS books (
                id TEXT PRIMARY KEY,
                title TEXT NOT NULL,
                author TEXT NOT NULL,
                summary TEXT,
                isbn TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (author) REFERENCES authors(id)
            )
        """)

        # Status values mirror bookinstance.STATUS_VALUES
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS bookinstances (
                id TEXT PRIMARY KEY,
                book TEXT NOT NULL,
                imprint TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'Maintenance'
                    CHECK(status IN ('Available', 'Maintenance', 'Loaned', 'Reserved')),
                due_back TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                FOREIGN KEY (book) REFERENCES books(id)
            )
        """)

        cursor.execute("CREATE INDEX IF NOT EXISTS idx_authors_family_name ON authors(family_name)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_books_author ON books(author)")
        cursor.execute("CREATE INDEX IF NOT EXISTS idx_bookinstances_book ON bookinstances(book)")

        conn.commit()
    finally:
        conn.close()


def initialize_database(db_file: Optional[str] = None) -> None:
    """Initialise the database, creating the tables when needed."""
    target = db_file or get_database_file()
    create_tables(target)
    logger.debug(f"Database ready at {target}")
