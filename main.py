import asyncio
import logging
import os
import subprocess
import sys
import webbrowser
from typing import Optional

import typer
from rich.console import Console

from author import Author
from bookinstance import BookInstance
from config import settings
from database import get_database_file, initialize_database
from seed import seed_catalog
from store import DocumentStore
from utils.ui_helpers import print_author_list, print_copy_list, set_output_mode

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

APP_NAME = "Local Library CLI"

console = Console()

app = typer.Typer(help=APP_NAME)


def _get_store() -> DocumentStore:
    return DocumentStore(get_database_file())


@app.callback()
def _global_options(
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output format: plain | json | rich (default: plain)",
    )
):
    """Global CLI options (e.g. output mode)."""
    if output:
        set_output_mode(output)


@app.command("init-db")
def cli_init_db():
    """Create the catalog tables."""
    db_file = get_database_file()
    initialize_database(db_file)
    print(f"Database initialised at {db_file}")


@app.command("seed")
def cli_seed():
    """Load a small sample catalog into an empty database."""
    created = asyncio.run(seed_catalog(_get_store()))
    if created:
        print(f"Seeded {created} records.")
    else:
        print("Catalog already contains authors; nothing seeded.")


@app.command("authors")
def cli_authors():
    """List all authors sorted by family name."""
    authors = asyncio.run(_get_store().find(Author, sort=[("family_name", "ascending")]))
    print_author_list(authors)


@app.command("copies")
def cli_copies():
    """List all book copies with their titles and statuses."""
    copies = asyncio.run(_get_store().find(BookInstance, populate=("book",)))
    print_copy_list(copies)


@app.command("serve")
def cli_serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from API_HOST)"),
    port: Optional[int] = typer.Option(None, "--port", help="Port (default from API_PORT)"),
    open_browser: bool = typer.Option(True, "--browser/--no-browser", help="Open the catalog in a web browser"),
):
    """Start the web interface with uvicorn."""
    host = host or settings.api_host
    port = int(port or settings.api_port)
    url = f"http://{host}:{port}/catalog"
    print(f"Starting web UI on {url}")
    if open_browser:
        try:
            webbrowser.open(url)
        except webbrowser.Error:
            console.print("[yellow]Could not open a web browser automatically.[/]")
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    try:
        subprocess.run(args, check=False, env=dict(os.environ, LIBRARY_DB_FILE=get_database_file()))
    except KeyboardInterrupt:
        console.print("[dim]Server stopped.[/]")


if __name__ == "__main__":
    app()
