from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, List, Optional

from book import Book
from loan import Loan

if TYPE_CHECKING:
    from library import Library

logger = logging.getLogger(__name__)


class LoanResult(Enum):
    """Outcome of a borrow or return attempt."""

    SUCCESS = "success"
    BOOK_UNAVAILABLE = "book unavailable"
    NO_MATCHING_LOAN = "no matching loan"

    def __bool__(self) -> bool:
        return self is LoanResult.SUCCESS


class Member:
    """A library member and the loans they have taken out.

    The constructor accepts any name and ID; use ``Librarian.create_member``
    for validated construction.
    """

    def __init__(self, name: str, id: int) -> None:
        self.name = name
        self.id = id
        self.loans: List[Loan] = []
        # Set by Library.add_member so new loans also land in the registry.
        self.library: Optional["Library"] = None

    def active_loans(self) -> List[Loan]:
        return [loan for loan in self.loans if loan.is_active]

    def borrowed_book(self, title: str) -> Optional[Book]:
        """The book behind this member's first active loan with ``title``."""
        for loan in self.loans:
            if loan.is_active and loan.book.title == title:
                return loan.book
        return None

    def borrow_book(self, book: Book) -> LoanResult:
        """Borrow ``book`` if a copy is on the shelf; otherwise change nothing."""
        if not book.is_available():
            logger.debug("%s could not borrow %r: no copies available", self, book.title)
            return LoanResult.BOOK_UNAVAILABLE
        loan = Loan(self, book)
        self.loans.append(loan)
        book.check_out()
        if self.library is not None:
            self.library.add_loan(loan)
        logger.info("%s borrowed %r", self, book.title)
        return LoanResult.SUCCESS

    def return_book(self, book: Book) -> LoanResult:
        """Close the first active loan of this exact book object."""
        for loan in self.loans:
            if loan.book is book and loan.is_active:
                loan.mark_as_returned()
                logger.info("%s returned %r", self, book.title)
                return LoanResult.SUCCESS
        logger.debug("%s has no active loan for %r", self, book.title)
        return LoanResult.NO_MATCHING_LOAN

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "active_loans": len(self.active_loans()),
            "total_loans": len(self.loans),
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"

    def __repr__(self) -> str:
        return f"Member({self.name!r}, {self.id!r})"
