"""Relations between posts: related, adjacent and translated."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from riseblog.config import DEFAULT_RELATED_LIMIT
from riseblog.core.types import AdjacentPosts, Locale, Post

if TYPE_CHECKING:
    from riseblog.content.loader import PostLoader


def shared_tag_count(post: Post, other: Post) -> int:
    """Number of ``other``'s tags that ``post`` also carries."""
    if not post.tags or not other.tags:
        return 0
    own = set(post.tags)
    return sum(1 for tag in other.tags if tag in own)


def related_posts(collection: Sequence[Post], slug: str, limit: int = DEFAULT_RELATED_LIMIT) -> list[Post]:
    """Rank the other posts by shared tags, then by date, newest first.

    When ``slug`` is not in the collection the most recent other posts are
    returned unscored.
    """
    others = [post for post in collection if post.slug != slug]
    current = next((post for post in collection if post.slug == slug), None)
    if current is None:
        return others[:limit]

    # Two stable sorts: date first, then score, so equal scores stay newest first.
    ranked = sorted(others, key=lambda post: post.date, reverse=True)
    ranked.sort(key=lambda post: shared_tag_count(current, post), reverse=True)
    return ranked[:limit]


def adjacent_posts(collection: Sequence[Post], slug: str) -> AdjacentPosts:
    """Return the newer (``previous``) and older (``next``) neighbours of a post.

    ``collection`` must be sorted newest first, as the loader returns it.
    """
    index = next((i for i, post in enumerate(collection) if post.slug == slug), None)
    if index is None:
        return AdjacentPosts()

    previous = collection[index - 1] if index > 0 else None
    following = collection[index + 1] if index < len(collection) - 1 else None
    return AdjacentPosts(previous=previous, next=following)


def slug_for_directory(collection: Sequence[Post], directory_slug: str) -> str | None:
    for post in collection:
        if post.directory_slug == directory_slug:
            return post.slug
    return None


def translated_slug(loader: PostLoader, directory_slug: str, target_locale: str | Locale) -> str | None:
    """Return the slug of a post in ``target_locale``, ``None`` if it is untranslated there."""
    return slug_for_directory(loader.load_collection(target_locale), directory_slug)
