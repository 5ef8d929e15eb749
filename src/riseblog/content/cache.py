"""Opt-in in-process cache for loaded collections."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from riseblog.core.types import Locale, Post

if TYPE_CHECKING:
    from riseblog.content.loader import PostLoader

logger = logging.getLogger(__name__)

Fingerprint = tuple[tuple[str, int, int], ...]


def content_fingerprint(roots: tuple[Path, ...]) -> Fingerprint:
    """Return (path, mtime_ns, size) for every file under ``roots``."""
    entries: list[tuple[str, int, int]] = []
    for root in roots:
        if not root.is_dir():
            continue
        for path in sorted(root.rglob("*")):
            try:
                if not path.is_file():
                    continue
                stat = path.stat()
            except OSError:
                # Removed between listing and stat; the next call sees the new state.
                continue
            entries.append((str(path), stat.st_mtime_ns, stat.st_size))
    return tuple(entries)


@dataclass(slots=True)
class CollectionCache:
    """Reuses loaded collections while the content files are unchanged.

    Each lookup still stats every file under ``roots``; only parsing and
    relationship resolution are skipped on a hit.
    """

    roots: tuple[Path, ...]
    _entries: dict[tuple[Locale, bool], tuple[Fingerprint, list[Post]]] = field(default_factory=dict)

    def get_or_load(self, loader: PostLoader, locale: str | Locale, *, include_drafts: bool) -> list[Post]:
        locale = Locale.parse(locale)
        key = (locale, include_drafts)
        fingerprint = content_fingerprint(self.roots)

        cached = self._entries.get(key)
        if cached is not None and cached[0] == fingerprint:
            logger.debug("Collection cache hit for %s", locale.value)
            return list(cached[1])

        posts = loader.load_collection(locale, include_drafts=include_drafts)
        self._entries[key] = (fingerprint, posts)
        return list(posts)

    def invalidate(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
