"""
Field predicates used by the validation registry.

Each rule takes the raw string and answers True when it is acceptable.
"""

import re

from email_validator import EmailNotValidError, validate_email

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 12

# Lowercase latin letters, digits, hyphen and underscore only
_USERNAME_RE = re.compile(r"[a-z0-9_-]+")


def is_valid_username(value: str) -> bool:
    """3 to 50 characters drawn from ``[a-z0-9_-]``."""
    if not USERNAME_MIN_LENGTH <= len(value) <= USERNAME_MAX_LENGTH:
        return False
    return _USERNAME_RE.fullmatch(value) is not None


def is_strong_password(value: str) -> bool:
    """
    At least 12 characters with an uppercase letter, a lowercase letter
    and a decimal digit.

    Each character counts towards the first class it belongs to. The scan
    stops as soon as all three classes have been seen.
    """
    if len(value) < PASSWORD_MIN_LENGTH:
        return False

    has_upper = has_lower = has_digit = False
    for char in value:
        if char.isupper():
            has_upper = True
        elif char.islower():
            has_lower = True
        elif char.isdecimal():
            has_digit = True

        if has_upper and has_lower and has_digit:
            return True

    return False


def is_email(value: str) -> bool:
    """Syntactic e-mail check; no DNS lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True
