import os
import json
from typing import Any, List

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

# Environment variable to control CLI output mode
# Allowed values: 'plain' (default), 'json', 'rich'
OUTPUT_MODE_ENV = "LIB_CLI_OUTPUT"

_console = Console()

def set_output_mode(mode: str) -> None:
    mode = (mode or "").lower().strip()
    if mode in {"plain", "json", "rich"}:
        os.environ[OUTPUT_MODE_ENV] = mode
    # Unknown values are ignored; the current mode stays in effect

def get_output_mode() -> str:
    return os.environ.get(OUTPUT_MODE_ENV, "plain").lower()

def print_book_list(books: List[Any]) -> None:
    """Print books in the current output mode.
    - plain: 'Title by Author (Year) - Copies: N' lines, or 'No books in library.'
    - json: array of title, author, year, amount
    - rich: Rich table
    """
    mode = get_output_mode()

    if not books:
        print("No books in library.")
        return

    if mode == "json":
        print(json.dumps([b.to_dict() for b in books], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="📚 Books", show_lines=True, header_style="bold cyan")
        table.add_column("Title", style="white")
        table.add_column("Author", style="white")
        table.add_column("Year", style="magenta", no_wrap=True)
        table.add_column("Copies", justify="right")
        for b in books:
            table.add_row(b.title, b.author, str(b.year), str(b.amount))
        _console.print(table)
    else:
        for b in books:
            print(str(b))

def print_member_list(members: List[Any]) -> None:
    mode = get_output_mode()

    if not members:
        print("No members registered.")
        return

    if mode == "json":
        print(json.dumps([m.to_dict() for m in members], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="👥 Members", show_lines=True, header_style="bold cyan")
        table.add_column("ID", style="magenta", no_wrap=True)
        table.add_column("Name", style="white")
        table.add_column("Active Loans", justify="right")
        for m in members:
            table.add_row(str(m.id), m.name, str(len(m.active_loans())))
        _console.print(table)
    else:
        for m in members:
            print(str(m))

def print_loan_list(loans: List[Any]) -> None:
    mode = get_output_mode()

    if not loans:
        print("No loans recorded.")
        return

    if mode == "json":
        print(json.dumps([l.to_dict() for l in loans], ensure_ascii=False))
    elif mode == "rich":
        table = Table(title="🔖 Loans", show_lines=True, header_style="bold cyan")
        table.add_column("Member", style="white")
        table.add_column("Book", style="white")
        table.add_column("Borrowed", no_wrap=True)
        table.add_column("Returned", no_wrap=True)
        for l in loans:
            returned = f"{l.return_date:%Y-%m-%d %H:%M}" if l.return_date else "-"
            table.add_row(str(l.member), l.book.title, f"{l.loan_date:%Y-%m-%d %H:%M}", returned)
        _console.print(table)
    else:
        for l in loans:
            state = "returned" if l.return_date else "active"
            print(f"{l.member} - {l.book.title} ({state})")

def print_status_result(status: Any) -> None:
    """Print a LibraryStatus in the current output mode.
    - plain: the one-line status summary
    - json: JSON object
    - rich: Panel with the four counters
    """
    mode = get_output_mode()

    if mode == "json":
        print(json.dumps({
            "total_books": status.total_books,
            "available_books": status.available_books,
            "total_members": status.total_members,
            "active_loans": status.active_loans,
        }, ensure_ascii=False))
    elif mode == "rich":
        content = (
            f"[bold]Total Books:[/] {status.total_books}\n"
            f"[bold]Available Books:[/] {status.available_books}\n"
            f"[bold]Total Members:[/] {status.total_members}\n"
            f"[bold]Active Loans:[/] {status.active_loans}"
        )
        _console.print(Panel.fit(content, title="📊 Library Status", border_style="blue"))
    else:
        print(str(status))
