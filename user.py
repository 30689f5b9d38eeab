from __future__ import annotations

from enum import Enum

# Presenting this ID at login grants the librarian role.
LIBRARIAN_ID = "0"


class Role(str, Enum):
    LIBRARIAN = "Librarian"
    MEMBER = "Member"


class User:
    """Someone who logged in; the role follows from the ID alone."""

    def __init__(self, user_name: str, user_id: str) -> None:
        self.user_name = user_name
        self.user_id = user_id

    @property
    def role(self) -> Role:
        return Role.LIBRARIAN if self.user_id == LIBRARIAN_ID else Role.MEMBER

    @property
    def is_librarian(self) -> bool:
        return self.role is Role.LIBRARIAN

    def to_dict(self) -> dict:
        return {"user_name": self.user_name, "user_id": self.user_id, "role": self.role.value}

    def __str__(self) -> str:
        return f"{self.user_name} ({self.user_id})"
