"""
Calendar date helpers for the ``YYYY-MM-DD`` external form.

All dates on a payment request travel as strings. ``date.fromisoformat``
alone is too lenient (it also takes ``20240601`` and week dates), so the
shape is checked first.
"""

import re
from datetime import date, datetime

ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_date(text: str | None) -> date | None:
    """
    Parse a ``YYYY-MM-DD`` string into a date.

    Returns None when the text is missing, has the wrong shape, or names
    a day that does not exist (e.g. ``2023-02-29``).
    """
    if not text or not ISO_DATE_PATTERN.fullmatch(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_iso_date(value: date | str | None) -> str | None:
    """Render a date as ``YYYY-MM-DD``; strings pass through unchanged."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()
