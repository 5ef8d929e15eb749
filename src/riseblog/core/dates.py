"""Calendar-date helpers for post dates and month archives.

Post dates are plain ``YYYY-MM-DD`` strings with no time component, so
lexical order equals chronological order.
"""

from __future__ import annotations

import re
from datetime import UTC, date, datetime

from dateutil import parser as date_parser

from riseblog.core.types import Locale

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{1,2})$")

MONTH_NAMES: dict[Locale, tuple[str, ...]] = {
    Locale.EN: (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    Locale.SK: (
        "január", "február", "marec", "apríl", "máj", "jún",
        "júl", "august", "september", "október", "november", "december",
    ),
}


def normalize_post_date(value: object) -> str | None:
    """Return ``value`` as a ``YYYY-MM-DD`` string, or ``None`` if it is not a date.

    YAML front-matter yields ``date`` objects for unquoted dates and strings
    for quoted ones; both are accepted. Aware datetimes are converted to UTC
    before the time is dropped.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not isinstance(value, str):
        return None

    token = value.strip()
    if not token:
        return None
    if _ISO_DATE_RE.match(token):
        try:
            return date.fromisoformat(token).isoformat()
        except ValueError:
            return None

    try:
        parsed = date_parser.isoparse(token)
    except (ValueError, OverflowError, TypeError):
        return None
    return normalize_post_date(parsed)


def month_key(post_date: str) -> str:
    """Return the ``YYYY-MM`` archive key of a ``YYYY-MM-DD`` date."""
    return post_date[:7]


def month_bounds(key: str) -> tuple[date, date] | None:
    """Return the half-open ``[month_start, next_month_start)`` interval for a month key."""
    match = _MONTH_KEY_RE.match(key.strip())
    if not match:
        return None
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        return None
    start = date(year, month, 1)
    end = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end


def month_label(key: str, locale: Locale) -> str:
    """Return a "Month Year" label, e.g. ``December 2025`` or ``december 2025``."""
    bounds = month_bounds(key)
    if bounds is None:
        return key
    start = bounds[0]
    return f"{MONTH_NAMES[locale][start.month - 1]} {start.year}"


def format_date(value: str | date, locale: Locale) -> str:
    """Format a post date for display.

    Slovak uses ``DD.MM.YYYY``; English uses ``December 5, 2025``. Values
    that are not dates are returned unchanged.
    """
    normalized = normalize_post_date(value)
    if normalized is None:
        return str(value)
    day = date.fromisoformat(normalized)
    if locale is Locale.SK:
        return f"{day.day:02d}.{day.month:02d}.{day.year}"
    return f"{MONTH_NAMES[locale][day.month - 1]} {day.day}, {day.year}"
