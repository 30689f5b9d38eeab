import json

import pytest
from typer.testing import CliRunner
from unittest.mock import patch

from main import app
from library import get_library
from book import Book

runner = CliRunner()


def _lines(*answers):
    return "\n".join(answers) + "\n"


def test_status_empty():
    result = runner.invoke(app, ["status"])
    assert result.exit_code == 0
    assert "Total Books: 0, Available Books: 0, Total Members: 0, Active Loans: 0" in result.stdout


def test_status_with_demo_data():
    result = runner.invoke(app, ["status", "--demo"])
    assert result.exit_code == 0
    assert "Total Books: 3, Available Books: 3, Total Members: 2, Active Loans: 1" in result.stdout


def test_status_json():
    result = runner.invoke(app, ["--output", "json", "status", "--demo"])
    assert result.exit_code == 0
    payload = json.loads(result.stdout.strip().splitlines()[-1])
    assert payload == {"total_books": 3, "available_books": 3, "total_members": 2, "active_loans": 1}


def test_books_empty():
    result = runner.invoke(app, ["books"])
    assert result.exit_code == 0
    assert "No books in library." in result.stdout


def test_books_lists_shared_library():
    get_library().add_book(Book("Emma", "Jane Austen", 1815, 2))
    result = runner.invoke(app, ["books"])
    assert result.exit_code == 0
    assert "Emma by Jane Austen (1815) - Copies: 2" in result.stdout


def test_members_and_loans_with_demo_data():
    result = runner.invoke(app, ["members", "--demo"])
    assert "Alice Reader (1)" in result.stdout
    assert "Bob Borrower (2)" in result.stdout

    result = runner.invoke(app, ["loans"])
    assert "Alice Reader (1) - Dune (active)" in result.stdout


def test_available_summary():
    result = runner.invoke(app, ["available", "--demo"])
    assert result.exit_code == 0
    assert "Dune by Frank Herbert (1965) - Copies: 1" in result.stdout
    assert "Clean Code by Robert C. Martin (2008) - Copies: 3" in result.stdout


def test_librarian_session():
    answers = _lines(
        "Head Librarian", "0",
        "6", "Dune", "Frank Herbert", "1965", "2",
        "4", "Ada", "1",
        "4", "Grace", "1",
        "8", "Dune", "1",
        "1",
        "0",
    )
    result = runner.invoke(app, ["menu"], input=answers)
    assert result.exit_code == 0
    assert "Book added: Dune, Copies: 2" in result.stdout
    assert "Member added: Ada" in result.stdout
    assert "Member with this ID already exists." in result.stdout
    assert "Book borrowed: Dune" in result.stdout
    assert "Active Loans: 1" in result.stdout
    assert "Goodbye!" in result.stdout

    lib = get_library()
    assert len(lib.get_members()) == 1
    assert lib.find_book("Dune").amount == 1


def test_librarian_rejects_invalid_book():
    answers = _lines("Head Librarian", "0", "6", "", "Someone", "2000", "1", "6", "X", "Y", "year", "1", "0")
    result = runner.invoke(app, ["menu"], input=answers)
    assert result.exit_code == 0
    assert "Error: Book title and author must not be empty." in result.stdout
    assert "Please enter valid year and amount." in result.stdout
    assert get_library().get_books() == []


def test_member_session_borrow_return_and_logout():
    answers = _lines(
        "Cleo", "3",
        "8", "Dune",
        "9", "Dune",
        "9", "Dune",
        "L",
        "", "",
    )
    result = runner.invoke(app, ["menu", "--demo"], input=answers)
    assert result.exit_code == 0
    assert "Welcome Cleo - ID: 3" in result.stdout
    assert "Book borrowed: Dune" in result.stdout
    assert "Book returned: Dune" in result.stdout
    assert "This book isn't borrowed by this member" in result.stdout
    assert "No valid input provided." in result.stdout

    cleo = get_library().find_member(3)
    assert cleo is not None
    assert len(cleo.loans) == 1
    assert cleo.loans[0].return_date is not None


def test_logout_accepts_lowercase_key():
    answers = _lines("Cleo", "3", "l", "", "")
    result = runner.invoke(app, ["menu", "--demo"], input=answers)
    assert result.exit_code == 0
    assert "Logged out Cleo (3)." in result.stdout
    assert "Please select one of the available options" not in result.stdout


def test_login_name_mismatch_is_reported():
    answers = _lines("Mallory", "1", "", "")
    result = runner.invoke(app, ["menu", "--demo"], input=answers)
    assert result.exit_code == 0
    assert "Member name does not match the ID." in result.stdout


@patch('subprocess.run')
@patch('webbrowser.open')
def test_serve_command(mock_webbrowser_open, mock_subprocess_run):
    result = runner.invoke(app, ["serve"])
    assert result.exit_code == 0
    assert "Starting API on" in result.stdout
    mock_webbrowser_open.assert_called_once()
    mock_subprocess_run.assert_called_once()
    args = mock_subprocess_run.call_args[0][0]
    assert "uvicorn" in args
    assert "api:app" in args
    assert "--host" in args
    assert "--port" in args
