"""Input and response-shape rules.

Pure functions: no I/O, so the prompt and the fetcher share them and tests can
exercise them directly.
"""

from __future__ import annotations

import re

from core.domain.models import MAX_NAME_LENGTH, MAX_VALUE_LENGTH
from core.errors import ShapeError, ValidationError, ValidationReason


_NAME_PUNCTUATION = frozenset("-'")

# Minimal shape: local@domain.tld, no whitespace and no extra '@'.
EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _is_name_char(ch: str) -> bool:
    # str.isalpha() is true exactly for the Unicode letter categories (L*).
    return ch.isalpha() or ch.isspace() or ch in _NAME_PUNCTUATION


def validate_name_input(raw: str) -> str:
    """Return `raw` trimmed, or raise `ValidationError`.

    Rules, checked in order: non-empty, at most 100 characters, only letters,
    whitespace, hyphen and apostrophe.
    """

    trimmed = raw.strip()
    if not trimmed:
        raise ValidationError(ValidationReason.EMPTY)
    if len(trimmed) > MAX_NAME_LENGTH:
        raise ValidationError(ValidationReason.TOO_LONG)
    if not all(_is_name_char(ch) for ch in trimmed):
        raise ValidationError(ValidationReason.INVALID_CHARACTERS)
    return trimmed


def _bounded(value: str, *, what: str) -> str:
    trimmed = value.strip()
    if not trimmed or len(trimmed) > MAX_VALUE_LENGTH:
        raise ShapeError(f"API returned invalid {what} length")
    return trimmed


def extract_fetched_value(payload: object) -> str:
    """Extract the fetched value from a decoded JSON payload.

    Accepted shapes:
    - a JSON string
    - a JSON object with a string `value` field

    Anything else raises `ShapeError`.
    """

    if isinstance(payload, str):
        return _bounded(payload, what="string")

    if isinstance(payload, dict):
        candidate = payload.get("value")
        if not isinstance(candidate, str):
            raise ShapeError('API returned unexpected JSON shape (missing "value" string)')
        return _bounded(candidate, what='"value"')

    raise ShapeError("API returned unexpected data type")


def is_valid_recipient(address: str) -> bool:
    return EMAIL_RE.fullmatch(address) is not None
