class LibraryError(Exception):
    """Base class for errors raised by the library domain."""


class InvalidArgumentError(LibraryError, ValueError):
    """Raised when a book, member or login is built from invalid input."""


class DuplicateMemberError(LibraryError, ValueError):
    """Raised when registering a member whose ID is already taken."""

    def __init__(self, member_id: int) -> None:
        super().__init__(f"Member ID {member_id} must be unique.")
        self.member_id = member_id
