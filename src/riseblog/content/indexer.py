"""Aggregate views over a loaded collection."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

from riseblog.core.dates import month_key, month_label
from riseblog.core.types import ArchiveBucket, Locale, Post, TagCount


def tag_frequencies(collection: Sequence[Post]) -> list[TagCount]:
    """Count resolved tag names across the collection, most used first.

    Tags with equal counts keep the order in which they were first seen.
    """
    counts: Counter[str] = Counter()
    for post in collection:
        counts.update(post.tags or ())
    return [TagCount(tag=tag, count=count) for tag, count in counts.most_common()]


def archive_buckets(collection: Sequence[Post], locale: str | Locale) -> list[ArchiveBucket]:
    """Group posts by calendar month, newest month first."""
    locale = Locale.parse(locale)
    counts = Counter(month_key(post.date) for post in collection)
    return [
        ArchiveBucket(key=key, label=month_label(key, locale), count=counts[key])
        for key in sorted(counts, reverse=True)
    ]
