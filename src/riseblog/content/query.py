"""Filtering and pagination of a loaded collection."""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import date

from riseblog.config import DEFAULT_PAGE_SIZE
from riseblog.core.dates import month_bounds
from riseblog.core.types import BlogFilters, Post, PostPage
from riseblog.core.utils import contains_folded
from riseblog.exceptions import InvalidInputError

logger = logging.getLogger(__name__)


def _matches_search(post: Post, needle: str) -> bool:
    if contains_folded(post.title, needle) or contains_folded(post.excerpt, needle):
        return True
    return any(contains_folded(tag, needle) for tag in post.tags or ())


def _in_month(post: Post, bounds: tuple[date, date]) -> bool:
    start, end = bounds
    return start <= post.published < end


def filter_posts(collection: Sequence[Post], filters: BlogFilters | None = None) -> list[Post]:
    """Apply every set filter to ``collection``, keeping its order.

    A month filter that is not a valid ``YYYY-MM`` key matches nothing.
    """
    posts = list(collection)
    if filters is None or filters.is_empty:
        return posts

    if filters.search:
        needle = filters.search.casefold()
        posts = [post for post in posts if _matches_search(post, needle)]

    if filters.tag:
        posts = [post for post in posts if filters.tag in (post.tags or ())]

    if filters.tag_slug:
        posts = [post for post in posts if filters.tag_slug in (post.tag_slugs or ())]

    if filters.date:
        bounds = month_bounds(filters.date)
        if bounds is None:
            logger.debug("Ignoring posts for malformed month filter %r", filters.date)
            return []
        posts = [post for post in posts if _in_month(post, bounds)]

    if filters.author:
        posts = [post for post in posts if post.author is not None and post.author.slug == filters.author]

    return posts


def paginate(posts: Sequence[Post], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> PostPage:
    """Slice one 1-indexed page out of ``posts``.

    Pages outside ``1..total_pages`` are empty rather than an error.

    Raises:
        InvalidInputError: If ``page_size`` is smaller than 1.

    """
    if page_size < 1:
        msg = f"page_size must be at least 1, got {page_size}"
        raise InvalidInputError(msg)

    total = len(posts)
    total_pages = math.ceil(total / page_size)
    if page < 1:
        return PostPage(posts=[], total=total, total_pages=total_pages)

    start = (page - 1) * page_size
    return PostPage(posts=list(posts[start : start + page_size]), total=total, total_pages=total_pages)


def filter_and_paginate(
    collection: Sequence[Post],
    filters: BlogFilters | None = None,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> PostPage:
    """Filter ``collection`` and return the requested page with totals."""
    return paginate(filter_posts(collection, filters), page, page_size)
