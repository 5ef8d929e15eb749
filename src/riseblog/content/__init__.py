"""Loading, indexing and querying of the post collection."""

from riseblog.content.cache import CollectionCache
from riseblog.content.indexer import archive_buckets, tag_frequencies
from riseblog.content.loader import PostLoader
from riseblog.content.lookup import RelationshipLookup
from riseblog.content.query import filter_and_paginate, filter_posts, paginate
from riseblog.content.relations import adjacent_posts, related_posts, translated_slug

__all__ = [
    "CollectionCache",
    "PostLoader",
    "RelationshipLookup",
    "adjacent_posts",
    "archive_buckets",
    "filter_and_paginate",
    "filter_posts",
    "paginate",
    "related_posts",
    "tag_frequencies",
    "translated_slug",
]
