"""Relationship lookup for authors and tags.

Posts refer to authors and tags by slug. Each slug names a small JSON
record (``<slug>.json``) in the authors or tags directory. Missing or
unreadable records never raise: authors degrade to a placeholder and tags
degrade to their raw slug.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from riseblog.core.types import Author, Locale, TagRecord
from riseblog.core.utils import clean_text

logger = logging.getLogger(__name__)


def _is_safe_slug(slug: str) -> bool:
    return bool(slug) and slug not in {".", ".."} and "/" not in slug and "\\" not in slug


class RelationshipLookup:
    """Resolves author and tag slugs against their JSON record directories."""

    def __init__(self, authors_dir: Path, tags_dir: Path) -> None:
        self.authors_dir = Path(authors_dir)
        self.tags_dir = Path(tags_dir)

    def _read_record(self, directory: Path, slug: str) -> dict[str, Any] | None:
        if not _is_safe_slug(slug):
            logger.debug("Refusing to look up unsafe slug %r", slug)
            return None

        path = directory / f"{slug}.json"
        if not path.is_file():
            logger.debug("No record for %s in %s", slug, directory)
            return None

        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

        if not isinstance(data, dict):
            logger.warning("Record %s is not a JSON object", path)
            return None
        return data

    # Authors

    def find_author(self, slug: str, locale: Locale) -> Author | None:
        """Return the author record for ``slug`` or ``None`` if there is none."""
        data = self._read_record(self.authors_dir, slug)
        if data is None:
            return None
        return Author(
            name=clean_text(data.get("name")) or slug,
            slug=slug,
            avatar=clean_text(data.get("avatar")),
            role=clean_text(data.get(f"role_{locale.value}")),
            bio=clean_text(data.get(f"bio_{locale.value}")),
        )

    def resolve_author(self, slug: str, locale: Locale) -> Author:
        """Return the author record, or a placeholder named after the slug."""
        author = self.find_author(slug, locale)
        if author is None:
            return Author.fallback(slug)
        return author

    # Tags

    def find_tag(self, slug: str) -> TagRecord | None:
        data = self._read_record(self.tags_dir, slug)
        if data is None:
            return None
        return TagRecord(
            slug=slug,
            name_en=clean_text(data.get("name_en")),
            name_sk=clean_text(data.get("name_sk")),
            slug_sk=clean_text(data.get("slug_sk")),
        )

    def resolve_tag_name(self, slug: str, locale: Locale) -> str:
        record = self.find_tag(slug)
        if record is None:
            return slug
        return record.display_name(locale)

    def resolve_tag_names(self, slugs: Iterable[Any], locale: Locale) -> list[str]:
        """Map tag slugs to display names, keeping their order.

        Anything other than a list or tuple of slugs resolves to no tags.
        """
        if not isinstance(slugs, (list, tuple)):
            return []
        return [self.resolve_tag_name(str(slug), locale) for slug in slugs]

    def tag_url_slug(self, slug: str, locale: Locale) -> str:
        """Return the URL slug of a tag in ``locale`` (Slovak may override it)."""
        record = self.find_tag(slug)
        if record is None:
            return slug
        return record.url_slug(locale)
