"""riseblog: bilingual content resolution and query layer for the Rise.sk blog."""

from riseblog.config import BlogConfig
from riseblog.content.loader import PostLoader
from riseblog.content.lookup import RelationshipLookup
from riseblog.core.types import Author, BlogFilters, Locale, Post
from riseblog.library import BlogLibrary

__version__ = "0.1.0"
__all__ = [
    "Author",
    "BlogConfig",
    "BlogFilters",
    "BlogLibrary",
    "Locale",
    "Post",
    "PostLoader",
    "RelationshipLookup",
]
