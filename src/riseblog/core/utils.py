"""Text helpers shared by the loader and the query engine."""

import math
from typing import Any

from riseblog.config import DEFAULT_WORDS_PER_MINUTE


def count_words(text: str) -> int:
    """Count whitespace-separated words."""
    return len(text.split())


def reading_time(text: str, words_per_minute: int = DEFAULT_WORDS_PER_MINUTE) -> int:
    """Estimate reading time in whole minutes, rounded up and never below one.

    Examples:
        >>> reading_time("word " * 200)
        1
        >>> reading_time("word " * 201)
        2
        >>> reading_time("")
        1

    """
    return max(1, math.ceil(count_words(text) / words_per_minute))


def contains_folded(haystack: str | None, needle: str) -> bool:
    """Case-insensitive substring test; ``needle`` must already be case-folded."""
    if not haystack:
        return False
    return needle in haystack.casefold()


def clean_text(value: Any) -> str | None:
    """Return ``value`` as stripped text, or ``None`` when it is missing or blank."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
