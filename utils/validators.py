"""
Input cleaning and identifier parsing shared by the services.
"""

from __future__ import annotations

import unicodedata
import uuid
from typing import Optional

from core.exceptions import ValidationFailedError


def strip_control_chars(value: str) -> str:
    """Drop control characters (category ``Cc``) such as NUL, ESC, CR/LF."""
    return "".join(ch for ch in value if unicodedata.category(ch) != "Cc")


def clean_text(field: str, value: object) -> str:
    """
    Normalise a free-text field before storage.

    Raises ``ValidationFailedError`` when the value is not a string or is
    empty once trimmed and stripped of control characters.
    """
    if not isinstance(value, str):
        raise ValidationFailedError.for_field(field, f"{field} must be a string")
    cleaned = strip_control_chars(value).strip()
    if not cleaned:
        raise ValidationFailedError.for_field(field, f"{field} is required")
    return cleaned


def normalize_email(email: str) -> str:
    return email.strip().lower()


def parse_uuid(value: object) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it isn't one."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None
