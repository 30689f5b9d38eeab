from typing import Any, Optional


class TextValidator:
    """Basic text checks shared by the factory, the login flow and the CLI."""

    @staticmethod
    def is_non_empty(text: Optional[str]) -> bool:
        if text is None:
            return False
        return bool(str(text).strip())

    @staticmethod
    def validate_title(title: Optional[str]) -> bool:
        return TextValidator.is_non_empty(title)

    @staticmethod
    def validate_author(author: Optional[str]) -> bool:
        return TextValidator.is_non_empty(author)

    @staticmethod
    def validate_name(name: Optional[str]) -> bool:
        return TextValidator.is_non_empty(name)


class NumberValidator:
    """Integer parsing for identifiers, years and copy counts typed by a user."""

    @staticmethod
    def parse_int(raw: Any) -> Optional[int]:
        """Return ``raw`` as an int, or None when it is not a whole number.

        Booleans are rejected even though they are ints in Python.
        """
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        if raw is None:
            return None
        s = str(raw).strip()
        if s[:1] in ("+", "-"):
            digits = s[1:]
        else:
            digits = s
        if not (digits.isascii() and digits.isdigit()):
            return None
        return int(s)
