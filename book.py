from __future__ import annotations

import logging

from errors import InvalidArgumentError

logger = logging.getLogger(__name__)


class Book:
    """Represents a catalog entry with a counter of copies on the shelf.

    Two books with the same title are still distinct objects; loans match
    books by identity.
    """

    def __init__(self, title: str, author: str, year: int, amount: int) -> None:
        if not title or not author:
            raise InvalidArgumentError("Title and author cannot be null or empty.")
        if amount < 0:
            raise InvalidArgumentError("Amount cannot be negative.")
        self._title = title
        self._author = author
        self._year = year
        self.amount = amount
        self.total_copies = amount

    @property
    def title(self) -> str:
        return self._title

    @property
    def author(self) -> str:
        return self._author

    @property
    def year(self) -> int:
        return self._year

    @property
    def details(self) -> str:
        return f"{self._title} by {self._author} ({self._year})"

    def check_out(self) -> bool:
        """Take one copy off the shelf. Returns False when none is left."""
        if self.amount > 0:
            self.amount -= 1
            return True
        logger.debug("No copies of %r left to check out", self._title)
        return False

    def check_in(self) -> None:
        self.amount += 1
        if self.amount > self.total_copies:
            logger.warning(
                "%r now has %d copies available, more than the %d it was created with",
                self._title, self.amount, self.total_copies,
            )

    def is_available(self) -> bool:
        return self.amount > 0

    def to_dict(self) -> dict:
        return {
            "title": self._title,
            "author": self._author,
            "year": self._year,
            "amount": self.amount,
            "total_copies": self.total_copies,
        }

    def __str__(self) -> str:
        return f"{self._title} by {self._author} ({self._year}) - Copies: {self.amount}"

    def __repr__(self) -> str:
        return f"Book({self._title!r}, {self._author!r}, {self._year!r}, amount={self.amount})"
