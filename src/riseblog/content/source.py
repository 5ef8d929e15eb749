"""Parsing of post documents into locale-normalised sources.

A post directory holds one canonical document with both locales' fields.
Titles, excerpts, SEO blocks and slug overrides carry a locale suffix
(``title_en``, ``title_sk``, ...). The English body is the document body
itself while the Slovak body is the ``content_sk`` front-matter field.
:func:`build_post_source` folds that difference into
``PostSource.contents`` so nothing downstream needs to know about it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from riseblog.core.dates import normalize_post_date
from riseblog.core.frontmatter import parse_frontmatter_file
from riseblog.core.types import Locale, LocaleContent, PostSource, SeoOverrides
from riseblog.core.utils import clean_text
from riseblog.exceptions import MalformedPostError

logger = logging.getLogger(__name__)

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1"})


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _string_tuple(value: Any) -> tuple[str, ...]:
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(str(item) for item in value if item is not None)


def _locale_content(metadata: dict[str, Any], body: str, locale: Locale) -> LocaleContent:
    suffix = locale.value
    if locale.is_default:
        localized_body = body
        slug_override = None
    else:
        raw_body = metadata.get(f"content_{suffix}")
        localized_body = raw_body if isinstance(raw_body, str) else ""
        slug_override = clean_text(metadata.get(f"slug_{suffix}"))

    return LocaleContent(
        title=clean_text(metadata.get(f"title_{suffix}")) or "",
        excerpt=clean_text(metadata.get(f"excerpt_{suffix}")) or "",
        body=localized_body,
        seo=SeoOverrides.from_raw(metadata.get(f"seo_{suffix}")),
        slug_override=slug_override,
    )


def build_post_source(directory_slug: str, metadata: dict[str, Any], body: str) -> PostSource:
    """Build a :class:`PostSource` from parsed front-matter and body.

    Raises:
        MalformedPostError: If the date is missing or is not a calendar date.

    """
    raw_date = metadata.get("date")
    post_date = normalize_post_date(raw_date)
    if post_date is None:
        raise MalformedPostError(directory_slug, f"invalid or missing date {raw_date!r}")

    author = metadata.get("author")
    author_slug = clean_text(author) if isinstance(author, str) else None
    if author is not None and not isinstance(author, str):
        logger.debug("Ignoring non-string author %r in post %s", author, directory_slug)

    # An explicit empty list still means "this post has tags", just none.
    raw_tags = metadata.get("tags")
    tag_slugs = _string_tuple(raw_tags) if raw_tags not in (None, "", False) else None
    if tag_slugs == () and not isinstance(raw_tags, (list, tuple)):
        logger.debug("Tags of post %s are not a list: %r", directory_slug, raw_tags)

    raw_gallery = metadata.get("galleryImages")
    gallery_images = _string_tuple(raw_gallery) if isinstance(raw_gallery, (list, tuple)) else None

    return PostSource(
        directory_slug=directory_slug,
        date=post_date,
        draft=_flag(metadata.get("draft")),
        featured=_flag(metadata.get("featured")),
        author_slug=author_slug,
        tag_slugs=tag_slugs,
        cover_image=clean_text(metadata.get("coverImage")),
        cover_image_alt=clean_text(metadata.get("coverImageAlt")),
        gallery_images=gallery_images,
        contents={locale: _locale_content(metadata, body, locale) for locale in Locale},
    )


def read_post_source(directory: Path, index_filename: str) -> PostSource | None:
    """Read the canonical document of one post directory.

    Returns ``None`` when the directory has no canonical document, which is
    how posts not yet migrated to the dual-locale format stay invisible.

    Raises:
        OSError: If the document exists but cannot be read.
        ContentError: If the document cannot be parsed.

    """
    path = directory / index_filename
    if not path.is_file():
        logger.debug("Skipping %s: no %s", directory.name, index_filename)
        return None

    metadata, body = parse_frontmatter_file(path)
    return build_post_source(directory.name, metadata, body)
