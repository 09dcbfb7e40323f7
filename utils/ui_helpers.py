import os
import json
from typing import List, Any
from rich.console import Console
from rich.table import Table

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()


def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode


def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()


def print_author_list(authors: List[Any]) -> None:
    """Print authors in the current output mode.
    - plain: 'id - Family, First (lifespan)' lines, or 'No authors in catalog.'
    - json: array of id, first_name, family_name, dates
    - rich: Rich table
    """
    mode = get_output_mode()

    if not authors:
        print("No authors in catalog.")
        return

    if mode == "json":
        print(json.dumps([a.to_dict() for a in authors], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="Authors", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Lifespan", style="white")
        for a in authors:
            table.add_row(a.id, a.name, a.lifespan)
        _console.print(table)
    else:
        for a in authors:
            lifespan = f" ({a.lifespan})" if a.lifespan else ""
            print(f"{a.id} - {a.name}{lifespan}")


def print_copy_list(copies: List[Any]) -> None:
    """Print book copies (with their populated book) in the current output mode."""
    mode = get_output_mode()

    if not copies:
        print("No book copies in catalog.")
        return

    def title_of(copy) -> str:
        return getattr(copy.book, "title", "") or ""

    if mode == "json":
        payload = [dict(c.to_dict(), title=title_of(c)) for c in copies]
        print(json.dumps(payload, ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="Book copies", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Title", style="white")
        table.add_column("Imprint", style="white")
        table.add_column("Status", style="green")
        table.add_column("Due back", style="white")
        for c in copies:
            table.add_row(c.id, title_of(c), c.imprint, c.status, c.due_back_formatted)
        _console.print(table)
    else:
        for c in copies:
            due = f" (due {c.due_back_formatted})" if c.due_back else ""
            print(f"{c.id} - {title_of(c)} : {c.imprint} [{c.status}]{due}")
