"""
Input Validators

Shape checks used for client-side form feedback and request validation.
These are advisory: the API re-validates before persisting anything.

None of the validators raise. Malformed or non-string input simply
yields False (or an invalid PasswordValidation).
"""

import re
from dataclasses import dataclass
from typing import Any

from email_validator import EmailNotValidError, validate_email
from markupsafe import escape

PHONE_PATTERN = re.compile(r"\+?[1-9]\d{1,14}", re.ASCII)
OBJECT_ID_PATTERN = re.compile(r"[0-9a-fA-F]{24}")

PASSWORD_MIN_LENGTH = 8


@dataclass
class PasswordValidation:
    """
    Outcome of a password strength check.

    Attributes:
        is_valid: Whether every rule passed
        message: First failed rule, or a confirmation
    """
    is_valid: bool
    message: str

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"is_valid": self.is_valid, "message": self.message}


def is_valid_email(email: Any) -> bool:
    """
    Check that an address is syntactically valid.

    No DNS or deliverability lookup is made.
    """
    if not isinstance(email, str) or not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def is_valid_phone(phone: Any) -> bool:
    """
    Basic E.164-style check: optional "+", no leading zero, 2-15 digits.

    Example:
        >>> is_valid_phone("+14155552671")
        True
        >>> is_valid_phone("555-123-4567")
        False
    """
    if not isinstance(phone, str):
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def validate_password(password: Any) -> PasswordValidation:
    """
    Check password strength.

    Rules, in order: at least 8 characters, one uppercase letter, one
    lowercase letter and one digit. The message names the first rule
    that fails.
    """
    if not isinstance(password, str) or len(password) < PASSWORD_MIN_LENGTH:
        return PasswordValidation(
            False, f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
        )

    if not re.search(r"[A-Z]", password):
        return PasswordValidation(
            False, "Password must contain at least one uppercase letter"
        )

    if not re.search(r"[a-z]", password):
        return PasswordValidation(
            False, "Password must contain at least one lowercase letter"
        )

    if not re.search(r"[0-9]", password):
        return PasswordValidation(False, "Password must contain at least one number")

    return PasswordValidation(True, "Password is valid")


def is_valid_object_id(value: Any) -> bool:
    """Check for the 24-hex-character document id shape."""
    if not isinstance(value, str):
        return False
    return OBJECT_ID_PATTERN.fullmatch(value) is not None


def sanitize_string(value: Any) -> str:
    """Trim and HTML-escape free text; non-strings become ""."""
    if not isinstance(value, str):
        return ""
    return str(escape(value.strip()))
