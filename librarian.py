from book import Book
from errors import InvalidArgumentError
from member import Member
from utils.validators import NumberValidator, TextValidator


class Librarian:
    """Validated construction of books and members.

    Nothing built here is registered anywhere; callers add the result to a
    ``Library`` themselves, which is also where member ID uniqueness is
    enforced.
    """

    def create_book(self, title: str, author: str, year: int, amount: int) -> Book:
        if not TextValidator.validate_title(title) or not TextValidator.validate_author(author):
            raise InvalidArgumentError("Book title and author must not be empty.")
        copies = NumberValidator.parse_int(amount)
        if copies is None:
            raise InvalidArgumentError("Book amount must be a whole number.")
        if copies < 0:
            raise InvalidArgumentError("Book amount cannot be negative.")
        return Book(title, author, year, copies)

    def create_member(self, name: str, member_id: int) -> Member:
        if not TextValidator.validate_name(name):
            raise InvalidArgumentError("Member name must not be empty.")
        parsed_id = NumberValidator.parse_int(member_id)
        if parsed_id is None or parsed_id <= 0:
            raise InvalidArgumentError("Member ID must be positive.")
        return Member(name, parsed_id)
