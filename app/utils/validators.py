"""
Scalar input validation helpers.
"""

import re
from typing import Any, Optional

from email_validator import EmailNotValidError, validate_email

from app.core.exceptions import InvalidInputError

# Ids are ASCII digits only and must fit a signed 64-bit column
_ID_PATTERN = re.compile(r"[0-9]+")
MAX_ID = 2**63 - 1


def is_valid_email(email: Optional[str]) -> bool:
    """Syntax-only email check (no DNS lookups)."""
    if not email or not isinstance(email, str):
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_id(value: Any, message: str, field: Optional[str] = None) -> int:
    """
    Parse a positive integer identifier from a path or body value.

    Raises:
        InvalidInputError: If the value is not a positive 64-bit integer
    """
    if isinstance(value, bool):
        raise InvalidInputError(message, field)
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and _ID_PATTERN.fullmatch(value.strip()):
        parsed = int(value.strip())
    else:
        raise InvalidInputError(message, field)

    if parsed <= 0 or parsed > MAX_ID:
        raise InvalidInputError(message, field)
    return parsed
