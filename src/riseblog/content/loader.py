"""Post loader: builds one locale's collection from the content root.

Every call rescans the content root. A post that cannot be read or parsed
is logged and skipped so one broken document never hides the rest of the
blog.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from riseblog.config import DEFAULT_WORDS_PER_MINUTE
from riseblog.content.lookup import RelationshipLookup
from riseblog.content.source import read_post_source
from riseblog.core.types import Locale, Post, PostSource
from riseblog.core.utils import reading_time
from riseblog.exceptions import ContentError

if TYPE_CHECKING:
    from riseblog.config import BlogConfig

logger = logging.getLogger(__name__)


class PostLoader:
    """Loads and resolves posts for a locale."""

    def __init__(
        self,
        posts_dir: Path,
        lookup: RelationshipLookup,
        *,
        index_filename: str = "index.mdx",
        development: bool = False,
        words_per_minute: int = DEFAULT_WORDS_PER_MINUTE,
    ) -> None:
        self.posts_dir = Path(posts_dir)
        self.lookup = lookup
        self.index_filename = index_filename
        self.development = development
        self.words_per_minute = words_per_minute

    @classmethod
    def from_config(cls, config: BlogConfig) -> PostLoader:
        paths = config.paths
        return cls(
            paths.abs_posts_dir,
            RelationshipLookup(paths.abs_authors_dir, paths.abs_tags_dir),
            index_filename=paths.index_filename,
            development=config.content.development,
            words_per_minute=config.content.words_per_minute,
        )

    def iter_sources(self) -> list[PostSource]:
        """Parse every post directory, skipping ones that are missing or broken."""
        if not self.posts_dir.is_dir():
            logger.debug("Posts directory %s does not exist", self.posts_dir)
            return []

        sources: list[PostSource] = []
        for directory in sorted(self.posts_dir.iterdir()):
            if not directory.is_dir():
                continue
            try:
                source = read_post_source(directory, self.index_filename)
            except (OSError, UnicodeDecodeError, ContentError) as exc:
                logger.warning("Skipping post %s: %s", directory.name, exc)
                continue
            if source is not None:
                sources.append(source)
        return sources

    def resolve(self, source: PostSource, locale: Locale) -> Post | None:
        """Return the locale view of a source, or ``None`` if it is untranslated."""
        content = source.content_for(locale)
        if not content.is_translated:
            return None

        author = None
        if source.author_slug:
            author = self.lookup.resolve_author(source.author_slug, locale)

        tags = None
        if source.tag_slugs is not None:
            tags = tuple(self.lookup.resolve_tag_names(source.tag_slugs, locale))

        return Post(
            slug=source.slug_for(locale),
            directory_slug=source.directory_slug,
            locale=locale,
            title=content.title,
            excerpt=content.excerpt,
            content=content.body,
            date=source.date,
            reading_time=reading_time(content.body, self.words_per_minute),
            author=author,
            tags=tags,
            tag_slugs=source.tag_slugs,
            draft=source.draft,
            featured=source.featured,
            cover_image=source.cover_image,
            cover_image_alt=source.cover_image_alt,
            gallery_images=source.gallery_images,
            seo=content.seo,
        )

    def load_collection(self, locale: str | Locale, *, include_drafts: bool | None = None) -> list[Post]:
        """Return all posts visible in ``locale``, newest first.

        Args:
            locale: Locale code or :class:`Locale`.
            include_drafts: Show draft posts. Defaults to the loader's
                development flag.

        Raises:
            UnsupportedLocaleError: If ``locale`` is not supported.

        """
        locale = Locale.parse(locale)
        show_drafts = self.development if include_drafts is None else include_drafts

        posts: list[Post] = []
        for source in self.iter_sources():
            if source.draft and not show_drafts:
                continue
            post = self.resolve(source, locale)
            if post is None:
                logger.debug("Post %s has no %s translation", source.directory_slug, locale.value)
                continue
            posts.append(post)

        # sort() is stable, so posts sharing a date keep directory order.
        posts.sort(key=lambda post: post.date, reverse=True)
        return posts

    def get_post(self, slug: str, locale: str | Locale) -> Post | None:
        """Find a post by its locale slug."""
        for post in self.load_collection(locale):
            if post.slug == slug:
                return post
        return None
