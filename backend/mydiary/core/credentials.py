"""Credential format rules and input sanitization.

Pure functions, no I/O. Validation checks empty fields first, then each
field's format in a fixed order, and reports the first failure.
"""

import html
import re
from enum import Enum

_USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9]{4,8}$")
_PASSWORD_PATTERN = re.compile(
    r"^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?=.*[!@#$%^&*])[a-zA-Z0-9!@#$%^&*]{4,8}$"
)
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class CredentialCheck(str, Enum):
    """Result of validating raw credential input."""

    OK = "ok"
    EMPTY_FIELDS = "empty_fields"
    BAD_USERNAME = "bad_username"
    BAD_PASSWORD = "bad_password"  # nosec B105
    BAD_EMAIL = "bad_email"


def _has_empty_fields(*values: str | None) -> bool:
    return any(not value for value in values)


def is_valid_username(username: str) -> bool:
    """Check username format: 4-8 letters or digits."""
    return _USERNAME_PATTERN.fullmatch(username) is not None


def is_valid_password(password: str) -> bool:
    """Check password format.

    4-8 characters with at least one uppercase letter, one lowercase letter,
    one digit and one symbol from ``!@#$%^&*``. No other characters allowed.
    """
    return _PASSWORD_PATTERN.fullmatch(password) is not None


def is_valid_email(email: str) -> bool:
    """Check email has the ``local@domain.tld`` shape."""
    return _EMAIL_PATTERN.fullmatch(email) is not None


def validate_login_input(
    username: str | None, password: str | None
) -> CredentialCheck:
    """Validate login form input.

    Args:
        username: Raw username from the form (may be None).
        password: Raw password from the form (may be None).

    Returns:
        CredentialCheck.OK or the first failing rule.
    """
    if _has_empty_fields(username, password):
        return CredentialCheck.EMPTY_FIELDS
    if not is_valid_username(username):
        return CredentialCheck.BAD_USERNAME
    if not is_valid_password(password):
        return CredentialCheck.BAD_PASSWORD
    return CredentialCheck.OK


def validate_registration_input(
    username: str | None, password: str | None, email: str | None
) -> CredentialCheck:
    """Validate registration form input.

    Args:
        username: Raw username from the form (may be None).
        password: Raw password from the form (may be None).
        email: Raw email from the form (may be None).

    Returns:
        CredentialCheck.OK or the first failing rule.
    """
    if _has_empty_fields(username, password, email):
        return CredentialCheck.EMPTY_FIELDS
    if not is_valid_username(username):
        return CredentialCheck.BAD_USERNAME
    if not is_valid_password(password):
        return CredentialCheck.BAD_PASSWORD
    if not is_valid_email(email):
        return CredentialCheck.BAD_EMAIL
    return CredentialCheck.OK


def sanitize_input(value: str | None) -> str | None:
    """HTML-escape a raw input value before it is stored or compared.

    Neutralizes markup that could later be reflected into a rendered view.
    None passes through unchanged.
    """
    if value is None:
        return None
    return html.escape(value)
