"""Month-year date codec.

Subscription dates are stored as the first day of a month and travel over
the wire as ``MM-YYYY`` (for example ``01-2025``).
"""

import re
from datetime import date

MONTH_YEAR_FORMAT = "MM-YYYY"

_MONTH_YEAR_RE = re.compile(r"([0-9]{2})-([0-9]{4})")


class InvalidDateFormat(ValueError):
    """Raised when a string is not a valid ``MM-YYYY`` date."""


def parse_month_year(text: str) -> date:
    """Parse ``MM-YYYY`` into the first day of that month.

    An empty string is an error, not an "unset" marker; callers decide
    whether a field is present before calling this.
    """
    if text == "":
        raise InvalidDateFormat("date string is empty")

    match = _MONTH_YEAR_RE.fullmatch(text) if isinstance(text, str) else None
    if not match:
        raise InvalidDateFormat(f"expected {MONTH_YEAR_FORMAT}, got {text!r}")

    month, year = int(match.group(1)), int(match.group(2))
    try:
        return date(year, month, 1)
    except ValueError as err:
        raise InvalidDateFormat(f"expected {MONTH_YEAR_FORMAT}, got {text!r}") from err


def format_month_year(value: date) -> str:
    """Render a date as ``MM-YYYY``."""
    return f"{value.month:02d}-{value.year:04d}"
