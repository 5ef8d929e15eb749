"""Data types and helpers for the blog content layer."""

from riseblog.core.types import (
    DEFAULT_LOCALE,
    AdjacentPosts,
    ArchiveBucket,
    Author,
    AuthorPage,
    BlogFilters,
    Locale,
    LocaleContent,
    Post,
    PostPage,
    PostSource,
    SeoOverrides,
    TagCount,
    TagRecord,
)

__all__ = [
    "DEFAULT_LOCALE",
    "AdjacentPosts",
    "ArchiveBucket",
    "Author",
    "AuthorPage",
    "BlogFilters",
    "Locale",
    "LocaleContent",
    "Post",
    "PostPage",
    "PostSource",
    "SeoOverrides",
    "TagCount",
    "TagRecord",
]
