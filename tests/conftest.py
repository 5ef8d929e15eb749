"""Shared fixtures: a throwaway site with posts, authors and tags on disk."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
import yaml

from riseblog.content.loader import PostLoader
from riseblog.content.lookup import RelationshipLookup
from riseblog.core.types import Author, Locale, Post


@dataclass
class ContentSite:
    """Writes content in the same layout the CMS produces."""

    root: Path

    @property
    def posts_dir(self) -> Path:
        return self.root / "src" / "content" / "blog"

    @property
    def authors_dir(self) -> Path:
        return self.root / "src" / "content" / "authors"

    @property
    def tags_dir(self) -> Path:
        return self.root / "src" / "content" / "tags"

    def add_post(
        self,
        directory_slug: str,
        *,
        date: Any = "2025-01-15",
        title_en: str | None = None,
        body: str = "English body text.",
        **fields: Any,
    ) -> Path:
        metadata: dict[str, Any] = {
            "title_en": f"Title {directory_slug}" if title_en is None else title_en,
            "date": date,
        }
        metadata.update(fields)
        front = yaml.safe_dump(metadata, allow_unicode=True, sort_keys=False)
        return self.write_document(directory_slug, f"---\n{front}---\n{body}\n")

    def write_document(self, directory_slug: str, text: str, filename: str = "index.mdx") -> Path:
        directory = self.posts_dir / directory_slug
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(text, encoding="utf-8")
        return path

    def add_author(self, slug: str, **data: Any) -> Path:
        return self._write_record(self.authors_dir, slug, data)

    def add_tag(self, slug: str, **data: Any) -> Path:
        return self._write_record(self.tags_dir, slug, data)

    def _write_record(self, directory: Path, slug: str, data: dict[str, Any]) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{slug}.json"
        path.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return path

    def lookup(self) -> RelationshipLookup:
        return RelationshipLookup(self.authors_dir, self.tags_dir)

    def loader(self, **kwargs: Any) -> PostLoader:
        return PostLoader(self.posts_dir, self.lookup(), **kwargs)


@pytest.fixture(autouse=True)
def _clean_riseblog_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("RISEBLOG_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def _restore_riseblog_logger() -> Iterator[None]:
    package_logger = logging.getLogger("riseblog")
    handlers, level = list(package_logger.handlers), package_logger.level
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)


@pytest.fixture
def site(tmp_path: Path) -> ContentSite:
    return ContentSite(root=tmp_path)


@pytest.fixture
def make_post() -> Callable[..., Post]:
    """Build an in-memory post without touching the filesystem."""

    def _make_post(
        slug: str,
        date: str = "2025-01-15",
        *,
        tags: tuple[str, ...] | None = None,
        author: str | None = None,
        title: str | None = None,
        excerpt: str = "",
        locale: Locale = Locale.EN,
        **fields: Any,
    ) -> Post:
        return Post(
            slug=slug,
            directory_slug=fields.pop("directory_slug", slug),
            locale=locale,
            title=title or f"Title {slug}",
            excerpt=excerpt,
            date=date,
            tags=tags,
            author=Author(name=author.title(), slug=author) if author else None,
            **fields,
        )

    return _make_post
