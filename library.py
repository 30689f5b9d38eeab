import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from book import Book
from errors import DuplicateMemberError, InvalidArgumentError
from librarian import Librarian
from loan import Loan
from member import Member
from user import LIBRARIAN_ID, User
from utils.validators import NumberValidator, TextValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LibraryStatus:
    total_books: int
    available_books: int
    total_members: int
    active_loans: int

    def __str__(self) -> str:
        return (
            f"Total Books: {self.total_books}, Available Books: {self.available_books}, "
            f"Total Members: {self.total_members}, Active Loans: {self.active_loans}"
        )


class Library:
    """Holds every book, member, loan and user known to the application.

    Read methods hand out copies of the internal lists. Apart from member ID
    uniqueness, nothing ties the four collections together.
    """

    def __init__(self, librarian: Optional[Librarian] = None) -> None:
        self._books: List[Book] = []
        self._members: List[Member] = []
        self._loans: List[Loan] = []
        self._users: List[User] = []
        self.librarian = librarian or Librarian()

    # ------------------------- Books ------------------------- #
    def add_book(self, book: Book) -> None:
        self._books.append(book)
        logger.info("Added book %s", book)

    def remove_book(self, book: Book) -> None:
        # list.remove compares with ==, which for Book is identity.
        if book in self._books:
            self._books.remove(book)
            logger.info("Removed book %s", book)

    def get_books(self) -> List[Book]:
        return list(self._books)

    def find_book(self, title: str, year: Optional[int] = None) -> Optional[Book]:
        for book in self._books:
            if book.title == title and (year is None or book.year == year):
                return book
        return None

    def find_available_book(self, title: str) -> Optional[Book]:
        for book in self._books:
            if book.title == title and book.is_available():
                return book
        return None

    def available_summary(self) -> Dict[str, int]:
        """Available copies per ``"title by author (year)"``, books with none left omitted."""
        summary: Dict[str, int] = {}
        for book in self._books:
            if book.is_available():
                summary[book.details] = summary.get(book.details, 0) + book.amount
        return summary

    # ------------------------- Members ------------------------- #
    def add_member(self, member: Member) -> None:
        if not self.is_member_id_unique(member.id):
            raise DuplicateMemberError(member.id)
        self._members.append(member)
        if member.library is None:
            member.library = self
        elif member.library is not self:
            logger.warning("%s already records its loans in another library", member)
        logger.info("Added member %s", member)

    def is_member_id_unique(self, member_id: int) -> bool:
        return all(m.id != member_id for m in self._members)

    def remove_member(self, member: Member) -> None:
        if member in self._members:
            self._members.remove(member)
            if member.library is self:
                member.library = None
            logger.info("Removed member %s", member)

    def get_members(self) -> List[Member]:
        return list(self._members)

    def find_member(self, member_id: int) -> Optional[Member]:
        for member in self._members:
            if member.id == member_id:
                return member
        return None

    # ------------------------- Loans ------------------------- #
    def add_loan(self, loan: Loan) -> None:
        """Record ``loan``; a loan object already on record is not added twice."""
        if any(l is loan for l in self._loans):
            logger.debug("Loan of %r by %s is already recorded", loan.book.title, loan.member)
            return
        self._loans.append(loan)

    def remove_loan(self, loan: Loan) -> None:
        if loan in self._loans:
            self._loans.remove(loan)

    def get_loans(self) -> List[Loan]:
        return list(self._loans)

    # ------------------------- Users ------------------------- #
    def add_user(self, user: User) -> None:
        self._users.append(user)

    def get_users(self) -> List[User]:
        return list(self._users)

    def login(self, user_name: str, user_id: str) -> User:
        """Resolve a name/ID pair into a ``User``, registering new members on the way.

        The reserved ID logs in as the librarian. Any other ID must be a
        whole number; if a member already holds it the names must match,
        otherwise a new member is created under that ID.
        """
        user_name = (user_name or "").strip()
        user_id = str(user_id if user_id is not None else "").strip()
        if not TextValidator.is_non_empty(user_name) or not TextValidator.is_non_empty(user_id):
            raise InvalidArgumentError("Both name and ID must be provided.")

        if user_id != LIBRARIAN_ID:
            member_id = NumberValidator.parse_int(user_id)
            if member_id is None:
                raise InvalidArgumentError("Invalid user ID format.")
            existing = self.find_member(member_id)
            if existing is None:
                self.add_member(self.librarian.create_member(user_name, member_id))
            elif existing.name != user_name:
                raise InvalidArgumentError("Member name does not match the ID.")

        user = User(user_name, user_id)
        self.add_user(user)
        logger.info("Logged in %s as %s", user, user.role.value)
        return user

    # ------------------------- Status ------------------------- #
    def get_status(self) -> LibraryStatus:
        return LibraryStatus(
            total_books=len(self._books),
            available_books=sum(1 for b in self._books if b.is_available()),
            total_members=len(self._members),
            active_loans=sum(1 for loan in self._loans if loan.is_active),
        )

    def get_library_status(self) -> str:
        return str(self.get_status())


_instance: Optional[Library] = None
_instance_lock = threading.Lock()


def get_library() -> Library:
    """Return the process-wide Library, creating it on first use."""
    global _instance
    if _instance is None:
        with _instance_lock:
            if _instance is None:
                _instance = Library()
                logger.debug("Library instance created")
    return _instance


def reset_library() -> None:
    """Forget the process-wide Library; the next ``get_library`` builds a fresh one."""
    global _instance
    with _instance_lock:
        _instance = None
