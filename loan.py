from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from book import Book
    from member import Member


class Loan:
    """A borrowing transaction between one member and one book."""

    def __init__(self, member: "Member", book: "Book") -> None:
        self.member = member
        self.book = book
        self.loan_date: datetime = datetime.now()
        self.return_date: Optional[datetime] = None

    @property
    def is_active(self) -> bool:
        return self.return_date is None

    def mark_as_returned(self) -> None:
        """Close the loan and put the copy back on the shelf.

        Calling this twice checks the book in twice; only call it on an
        active loan.
        """
        self.return_date = datetime.now()
        self.book.check_in()

    def to_dict(self) -> dict:
        return {
            "member_id": self.member.id,
            "member_name": self.member.name,
            "title": self.book.title,
            "loan_date": self.loan_date.isoformat(),
            "return_date": self.return_date.isoformat() if self.return_date else None,
        }

    def __repr__(self) -> str:
        state = "active" if self.is_active else f"returned {self.return_date:%Y-%m-%d %H:%M}"
        return f"Loan({self.member!s} -> {self.book.title!r}, {state})"
