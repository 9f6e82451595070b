"""Input sanitization helpers for free-text form values."""

import re

from config import PLAYER_NAME_MAX_LENGTH

_CONTROL_WHITESPACE = re.compile(r"[\r\n\t]+")
_REPEATED_SPACES = re.compile(r"\s{2,}")
_NON_DIGITS = re.compile(r"\D")


def sanitize_string(value: str | None, max_len: int = PLAYER_NAME_MAX_LENGTH) -> str:
    """Collapse line breaks, tabs and repeated spaces, trim, and cut to max_len.

    Args:
        value: Raw user input (None is treated as empty)
        max_len: Maximum length of the result

    Returns:
        The cleaned string, possibly empty
    """
    if not value:
        return ""
    cleaned = _CONTROL_WHITESPACE.sub(" ", value)
    cleaned = _REPEATED_SPACES.sub(" ", cleaned)
    return cleaned.strip()[:max_len]


def whatsapp_digits(value: str | None) -> str:
    """Digits of a phone number, formatting removed."""
    return _NON_DIGITS.sub("", value or "")


def is_valid_whatsapp(value: str | None) -> bool:
    """An empty contact is valid (it is optional); otherwise 10 to 15 digits."""
    if not value:
        return True
    return 10 <= len(whatsapp_digits(value)) <= 15


def clamp_number(value: int | float | None, minimum: int = 0, maximum: int = 1000) -> int | float:
    """Clamp to [minimum, maximum]; None and NaN become minimum."""
    if value is None or value != value:
        return minimum
    return max(minimum, min(maximum, value))
