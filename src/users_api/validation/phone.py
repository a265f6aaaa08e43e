"""Phone number validation shared by all phone fields."""

from __future__ import annotations

import re
from typing import Any

from pydantic_core import PydanticCustomError

# Optional "+", then either a short country code followed by a
# parenthesised area code ("+1(555)") or a bare / parenthesised group of
# 1-3 digits, then digits, spaces, hyphens, dots and slashes.
PHONE_PATTERN = re.compile(
    r"\+*(?:[0-9]{0,3}\s?\([0-9]{1,3}\)|\(?[0-9]{1,3}\)?)[-\s./0-9]*"
)

MISSING_PHONE_MESSAGE = "missing Phone value"


def validate_phone_number(value: Any) -> bool:
    """Return ``True`` if *value* looks like a phone number."""
    if not isinstance(value, str) or not value:
        return False
    return PHONE_PATTERN.fullmatch(value) is not None


def check_phone_number(value: str | None, message: str) -> str:
    """Pydantic validator body for phone fields.

    An absent value fails with ``"missing Phone value"``; a present but
    malformed one fails with *message*.
    """
    if value is None or value == "":
        raise PydanticCustomError("missing_value", MISSING_PHONE_MESSAGE)
    if not validate_phone_number(value):
        raise PydanticCustomError("phone_format", message)
    return value
