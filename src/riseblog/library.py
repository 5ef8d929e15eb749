"""Per-locale entry points for page renderers.

:class:`BlogLibrary` wires the loader, the optional collection cache and
the pure query helpers together. Each method loads the locale's
collection on demand, so callers only pass a locale and their query.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from riseblog.config import DEFAULT_PAGE_SIZE, DEFAULT_RELATED_LIMIT, BlogConfig
from riseblog.content.cache import CollectionCache
from riseblog.content.indexer import archive_buckets, tag_frequencies
from riseblog.content.loader import PostLoader
from riseblog.content.query import filter_and_paginate, filter_posts
from riseblog.content.relations import adjacent_posts, related_posts, slug_for_directory
from riseblog.core.types import (
    AdjacentPosts,
    ArchiveBucket,
    Author,
    AuthorPage,
    BlogFilters,
    Locale,
    Post,
    PostPage,
    TagCount,
)

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class BlogLibrary:
    """Facade over the post collection of both locales."""

    def __init__(
        self,
        loader: PostLoader,
        *,
        cache: CollectionCache | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        related_limit: int = DEFAULT_RELATED_LIMIT,
    ) -> None:
        self.loader = loader
        self.cache = cache
        self.page_size = page_size
        self.related_limit = related_limit

    @classmethod
    def from_config(cls, config: BlogConfig) -> BlogLibrary:
        cache = None
        if config.content.cache_enabled:
            paths = config.paths
            cache = CollectionCache(roots=(paths.abs_posts_dir, paths.abs_authors_dir, paths.abs_tags_dir))
        return cls(
            PostLoader.from_config(config),
            cache=cache,
            page_size=config.content.page_size,
            related_limit=config.content.related_limit,
        )

    @classmethod
    def open(cls, site_root: Path | None = None) -> BlogLibrary:
        """Build a library from ``.riseblog.toml`` and the environment."""
        return cls.from_config(BlogConfig.load(site_root))

    def posts(self, locale: str | Locale, *, include_drafts: bool | None = None) -> list[Post]:
        """Return the locale's collection, newest first."""
        show_drafts = self.loader.development if include_drafts is None else include_drafts
        if self.cache is not None:
            return self.cache.get_or_load(self.loader, locale, include_drafts=show_drafts)
        return self.loader.load_collection(locale, include_drafts=show_drafts)

    def get_post(self, slug: str, locale: str | Locale) -> Post | None:
        return next((post for post in self.posts(locale) if post.slug == slug), None)

    def get_author(self, slug: str, locale: str | Locale) -> Author:
        return self.loader.lookup.resolve_author(slug, Locale.parse(locale))

    def related_posts(self, slug: str, locale: str | Locale, limit: int | None = None) -> list[Post]:
        return related_posts(self.posts(locale), slug, self.related_limit if limit is None else limit)

    def adjacent_posts(self, slug: str, locale: str | Locale) -> AdjacentPosts:
        return adjacent_posts(self.posts(locale), slug)

    def all_tags(self, locale: str | Locale) -> list[TagCount]:
        return tag_frequencies(self.posts(locale))

    def archive_dates(self, locale: str | Locale) -> list[ArchiveBucket]:
        return archive_buckets(self.posts(locale), locale)

    def filtered_posts(
        self,
        locale: str | Locale,
        filters: BlogFilters | None = None,
        page: int = 1,
        page_size: int | None = None,
    ) -> PostPage:
        return filter_and_paginate(
            self.posts(locale),
            filters,
            page,
            self.page_size if page_size is None else page_size,
        )

    def translated_slug(self, directory_slug: str, target_locale: str | Locale) -> str | None:
        return slug_for_directory(self.posts(target_locale), directory_slug)

    def author_page(self, slug: str, locale: str | Locale) -> AuthorPage | None:
        """Return an author with all of their posts.

        ``None`` means there is neither an author record nor any post
        attributed to the slug, which renderers treat as "not found".
        """
        locale = Locale.parse(locale)
        author = self.get_author(slug, locale)
        posts = filter_posts(self.posts(locale), BlogFilters(author=slug))
        if not author.resolved and not posts:
            logger.debug("No author record or posts for %s", slug)
            return None
        return AuthorPage(author=author, posts=posts)
