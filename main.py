import logging
import subprocess
import sys
import webbrowser
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Prompt
from rich.markup import escape
from rich import box
import typer

from config import settings
from errors import LibraryError
from library import Library, get_library
from member import Member
from seed import seed_demo_data
from user import User
from utils.ui_helpers import (
    set_output_mode,
    print_book_list,
    print_loan_list,
    print_member_list,
    print_status_result,
)
from utils.validators import NumberValidator

APP_NAME = settings.app_name

console = Console()
logger = logging.getLogger(__name__)


def _load_library(demo: bool = False) -> Library:
    """Shared library for this process, seeded once when demo data is requested."""
    lib = get_library()
    if (demo or settings.seed_demo_data) and not lib.get_books():
        seed_demo_data(lib)
    return lib

# --- Typer CLI application ---
app = typer.Typer(help=f"{APP_NAME} CLI")

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
    logging.basicConfig(level=settings.log_level)
    set_output_mode(output or settings.output_mode)

@app.command("status")
def cli_status(demo: bool = typer.Option(False, "--demo", help="Load the demo catalog first")):
    """Show book, member and loan counts."""
    print_status_result(_load_library(demo).get_status())

@app.command("books")
def cli_books(demo: bool = typer.Option(False, "--demo", help="Load the demo catalog first")):
    """List every book with its available copies."""
    print_book_list(_load_library(demo).get_books())

@app.command("available")
def cli_available(demo: bool = typer.Option(False, "--demo", help="Load the demo catalog first")):
    """List available titles with their summed copies."""
    summary = _load_library(demo).available_summary()
    if not summary:
        print("No books available.")
        return
    for details, copies in summary.items():
        print(f"{details} - Copies: {copies}")

@app.command("members")
def cli_members(demo: bool = typer.Option(False, "--demo", help="Load the demo catalog first")):
    """List registered members."""
    print_member_list(_load_library(demo).get_members())

@app.command("loans")
def cli_loans(demo: bool = typer.Option(False, "--demo", help="Load the demo catalog first")):
    """List every loan, active and returned."""
    print_loan_list(_load_library(demo).get_loans())

@app.command("menu")
def cli_menu(demo: bool = typer.Option(False, "--demo", help="Load the demo catalog first")):
    """Log in and manage the library interactively."""
    run_menu(_load_library(demo))

@app.command("serve")
def cli_serve():
    """Start the HTTP API with uvicorn."""
    host = settings.api_host
    port = int(settings.api_port)
    url = f"http://{host}:{port}/docs"
    print(f"Starting API on {url}")
    try:
        webbrowser.open(url)
    except webbrowser.Error:
        logger.warning("Could not open a browser for %s", url)
    args = [
        sys.executable,
        "-m", "uvicorn",
        "api:app",
        "--host", host,
        "--port", str(port),
    ]
    try:
        subprocess.run(args)
    except FileNotFoundError:
        console.print("[bold red]Error:[/] `uvicorn` could not be started. Make sure it is installed.")

# --- Interactive session ---
def _ask_member_id(prompt: str = "Member ID") -> Optional[int]:
    member_id = NumberValidator.parse_int(Prompt.ask(prompt, console=console))
    if member_id is None:
        console.print("[red]Invalid Member ID[/]")
    return member_id

def _acting_member(lib: Library, user: User) -> Optional[Member]:
    """The member a loan operation applies to: asked for by librarians, the user otherwise."""
    if user.is_librarian:
        member_id = _ask_member_id("Enter Member ID")
        if member_id is None:
            return None
    else:
        member_id = int(user.user_id)
    return lib.find_member(member_id)

def show_status(lib: Library) -> None:
    """Status line followed by the available titles."""
    status = lib.get_status()
    summary = lib.available_summary()
    for details, copies in summary.items():
        logger.debug("Available book: %s - Copies: %d", details, copies)
    lines = [escape(str(status))]
    lines += [f"  {escape(details)} - Copies: {copies}" for details, copies in summary.items()]
    console.print(Panel("\n".join(lines), title="📊 Library Status", border_style="blue"))

def add_member(lib: Library) -> None:
    name = Prompt.ask("Member name", console=console).strip()
    if not name:
        console.print("[red]Member name cannot be empty.[/]")
        return
    member_id = NumberValidator.parse_int(Prompt.ask("Member ID", console=console))
    if member_id is None:
        console.print("[red]Invalid ID format.[/]")
        return
    if not lib.is_member_id_unique(member_id):
        console.print("[red]Error: Member with this ID already exists.[/]")
        return
    try:
        member = lib.librarian.create_member(name, member_id)
        lib.add_member(member)
    except LibraryError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        return
    console.print(f"[green]Member added: {escape(name)}[/]")

def remove_member(lib: Library) -> None:
    member_id = _ask_member_id()
    if member_id is None:
        return
    member = lib.find_member(member_id)
    if member is None:
        console.print("[red]No such member exists![/]")
        return
    lib.remove_member(member)
    console.print(f"[green]Member removed: {escape(member.name)}[/]")

def add_book(lib: Library) -> None:
    title = Prompt.ask("Title", console=console).strip()
    author = Prompt.ask("Author", console=console).strip()
    year = NumberValidator.parse_int(Prompt.ask("Year", console=console))
    amount = NumberValidator.parse_int(Prompt.ask("Amount", console=console))
    if year is None or amount is None:
        console.print("[red]Please enter valid year and amount.[/]")
        return
    try:
        book = lib.librarian.create_book(title, author, year, amount)
    except LibraryError as e:
        console.print(f"[red]Error: {escape(str(e))}[/]")
        return
    lib.add_book(book)
    console.print(f"[green]Book added: {escape(title)}, Copies: {amount}[/]")

def delete_book(lib: Library) -> None:
    title = Prompt.ask("Title", console=console).strip()
    year_text = Prompt.ask("Year (blank for any)", default="", console=console).strip()
    year = NumberValidator.parse_int(year_text) if year_text else None
    if year_text and year is None:
        console.print("[red]Please enter a valid year.[/]")
        return
    book = lib.find_book(title, year)
    if book is None:
        console.print("[red]No such book exists![/]")
        return
    lib.remove_book(book)
    console.print(f"[green]Book deleted: {escape(title)}[/]")

def borrow(lib: Library, user: User) -> None:
    title = Prompt.ask("Book title", console=console).strip()
    member = _acting_member(lib, user)
    book = lib.find_available_book(title)
    if member is None or book is None:
        console.print("[red]Book not available or Member not found[/]")
        return
    member.borrow_book(book)
    console.print(f"[green]Book borrowed: {escape(title)}[/]")

def give_back(lib: Library, user: User) -> None:
    title = Prompt.ask("Book title", console=console).strip()
    member = _acting_member(lib, user)
    book = member.borrowed_book(title) if member else None
    if member is None or book is None:
        console.print("[red]This book isn't borrowed by this member[/]")
        return
    member.return_book(book)
    console.print(f"[green]Book returned: {escape(title)}[/]")

def login(lib: Library) -> Optional[User]:
    """Ask for a name and ID until a login succeeds; None when left blank."""
    while True:
        name = Prompt.ask("Name", console=console).strip()
        user_id = Prompt.ask("User ID", console=console).strip()
        if not name or not user_id:
            console.print("No valid input provided.")
            return None
        try:
            return lib.login(name, user_id)
        except LibraryError as e:
            console.print(f"[red]Login Error: {escape(str(e))}[/]")

def run_session(lib: Library, user: User) -> bool:
    """Menu loop for one logged-in user. Returns True on logout, False on exit."""
    librarian_only = {"3", "4", "5", "6", "7"}
    menu_items = [
        ("1", "Library status", "📊"),
        ("2", "List books", "📚"),
        ("3", "List members", "👥"),
        ("4", "Add member", "➕"),
        ("5", "Remove member", "➖"),
        ("6", "Add book", "📗"),
        ("7", "Delete book", "🗑️"),
        ("8", "Borrow book", "📤"),
        ("9", "Return book", "📥"),
        ("L", "Logout", "🔒"),
        ("0", "Exit", "🚪"),
    ]
    if not user.is_librarian:
        menu_items = [item for item in menu_items if item[0] not in librarian_only]
    choices = [key for key, _, _ in menu_items]

    if user.is_librarian:
        welcome = "Welcome Librarian"
    else:
        welcome = f"Welcome {user.user_name} - ID: {user.user_id}"

    while True:
        table = Table.grid(padding=(0, 2))
        table.add_column(justify="right", style="bold cyan", width=4)
        table.add_column(justify="left", style="white")
        for key, label, icon in menu_items:
            table.add_row(f"[reverse]{key}[/]", f"{icon} {label}")
        console.print(Panel(
            table,
            title=f"{APP_NAME} - {escape(welcome)} - Role: {user.role.value}",
            border_style="cyan",
            box=box.HEAVY,
            padding=(1, 2),
        ))
        choice = Prompt.ask(
            "Select an option", choices=choices, default="1", case_sensitive=False, console=console
        ).strip().upper()

        if choice == "1":
            show_status(lib)
        elif choice == "2":
            print_book_list(lib.get_books())
        elif choice == "3":
            print_member_list(lib.get_members())
        elif choice == "4":
            add_member(lib)
        elif choice == "5":
            remove_member(lib)
        elif choice == "6":
            add_book(lib)
        elif choice == "7":
            delete_book(lib)
        elif choice == "8":
            borrow(lib, user)
        elif choice == "9":
            give_back(lib, user)
        elif choice == "L":
            console.print(f"Logged out {escape(str(user))}.")
            return True
        elif choice == "0":
            return False

def run_menu(lib: Library) -> None:
    """Login, menu, logout, repeat until the user exits."""
    while True:
        user = login(lib)
        if user is None or not run_session(lib, user):
            console.print("[green]Goodbye![/]")
            return

if __name__ == "__main__":
    logging.basicConfig(level=settings.log_level)
    if len(sys.argv) > 1:
        app()
    else:
        run_menu(_load_library())
