"""
Presence and format checks applied before a request is sent.

The helpers raise :class:`~plot_market.core.errors.ValidationError` with
the message given by the caller, so every operation can word its own
errors ("Plot ID is required", "Email is required", ...).
"""

import re
from typing import Any, Optional

from .errors import ValidationError


EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PHONE_LENGTH = 10


def require_text(value: Optional[str], message: str) -> str:
    """Return ``value`` stripped of whitespace, or raise if it is blank."""
    if value is None or not str(value).strip():
        raise ValidationError(message)
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip ``value``; blank strings become ``None``."""
    if value is None:
        return None
    return str(value).strip() or None


def reject_blank(value: Optional[str], message: str) -> Optional[str]:
    """Allow ``None`` but reject a supplied value that is only whitespace.

    An empty string counts as "not supplied", matching partial updates
    where falsy fields are left out of the payload.
    """
    if not value:
        return None
    stripped = str(value).strip()
    if not stripped:
        raise ValidationError(message)
    return stripped


def is_valid_email(value: str) -> bool:
    return bool(EMAIL_RE.match(value or ""))


def is_valid_phone(value: str) -> bool:
    return len(value or "") >= MIN_PHONE_LENGTH


def check_rating(rating: Any) -> int:
    if isinstance(rating, bool) or not isinstance(rating, int) or not 1 <= rating <= 5:
        raise ValidationError("Rating must be between 1 and 5")
    return rating
