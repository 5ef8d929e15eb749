"""Core data types for the bilingual blog collection."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from riseblog.exceptions import UnsupportedLocaleError


class Locale(str, Enum):
    EN = "en"
    SK = "sk"

    @classmethod
    def parse(cls, value: str | Locale) -> Locale:
        """Return the locale for a code such as ``"sk"`` or ``"EN"``.

        Raises:
            UnsupportedLocaleError: If the code is not a supported locale.

        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as exc:
            raise UnsupportedLocaleError(value) from exc

    @property
    def is_default(self) -> bool:
        return self is DEFAULT_LOCALE

    @property
    def other(self) -> Locale:
        return Locale.SK if self is Locale.EN else Locale.EN


# English owns the unsuffixed body and the directory name.
DEFAULT_LOCALE = Locale.EN


class SeoOverrides(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str | None = None
    description: str | None = None
    keywords: str | None = None
    image: str | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> SeoOverrides | None:
        """Build overrides from a front-matter mapping, ``None`` when nothing is set."""
        if not isinstance(raw, Mapping):
            return None
        values: dict[str, str] = {}
        for name in cls.model_fields:
            value = raw.get(name)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values[name] = text
        if not values:
            return None
        return cls(**values)


class Author(BaseModel):
    """An author record resolved for one locale.

    ``resolved`` is False for the placeholder built when no record exists;
    that placeholder uses the slug as its name.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    slug: str
    avatar: str | None = None
    role: str | None = None
    bio: str | None = None
    resolved: bool = True

    @classmethod
    def fallback(cls, slug: str) -> Author:
        return cls(name=slug, slug=slug, resolved=False)


class TagRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    name_en: str | None = None
    name_sk: str | None = None
    slug_sk: str | None = None

    def display_name(self, locale: Locale) -> str:
        if locale is Locale.SK:
            return self.name_sk or self.name_en or self.slug
        return self.name_en or self.slug

    def url_slug(self, locale: Locale) -> str:
        if locale is Locale.SK and self.slug_sk:
            return self.slug_sk
        return self.slug


class LocaleContent(BaseModel):
    """The per-locale payload of a post document."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    excerpt: str = ""
    body: str = ""
    seo: SeoOverrides | None = None
    slug_override: str | None = None

    @property
    def is_translated(self) -> bool:
        return bool(self.title.strip())


class PostSource(BaseModel):
    """A parsed post document holding both locales.

    Locale-independent metadata is stored once; everything that differs per
    locale lives in ``contents``.
    """

    model_config = ConfigDict(frozen=True)

    directory_slug: str
    date: str
    draft: bool = False
    featured: bool = False
    author_slug: str | None = None
    tag_slugs: tuple[str, ...] | None = None
    cover_image: str | None = None
    cover_image_alt: str | None = None
    gallery_images: tuple[str, ...] | None = None
    contents: dict[Locale, LocaleContent] = Field(default_factory=dict)

    def content_for(self, locale: Locale) -> LocaleContent:
        return self.contents.get(locale) or LocaleContent()

    def slug_for(self, locale: Locale) -> str:
        if locale.is_default:
            return self.directory_slug
        override = self.content_for(locale).slug_override
        return override or self.directory_slug


class Post(BaseModel):
    model_config = ConfigDict(frozen=True)

    slug: str
    directory_slug: str
    locale: Locale
    title: str
    excerpt: str = ""
    content: str = ""
    date: str
    reading_time: int = 1
    author: Author | None = None
    tags: tuple[str, ...] | None = None
    tag_slugs: tuple[str, ...] | None = None
    draft: bool = False
    featured: bool = False
    cover_image: str | None = None
    cover_image_alt: str | None = None
    gallery_images: tuple[str, ...] | None = None
    seo: SeoOverrides | None = None

    @property
    def published(self) -> date:
        return date.fromisoformat(self.date)


class BlogFilters(BaseModel):
    """Optional, conjunctive filters for a collection.

    ``tag`` matches resolved display names while ``author`` and ``tag_slug``
    match storage slugs.
    """

    search: str | None = None
    tag: str | None = None
    tag_slug: str | None = None
    date: str | None = Field(default=None, description="Month key in YYYY-MM format")
    author: str | None = Field(default=None, description="Author slug")

    @property
    def is_empty(self) -> bool:
        return not any((self.search, self.tag, self.tag_slug, self.date, self.author))


class PostPage(BaseModel):
    posts: list[Post] = Field(default_factory=list)
    total: int = 0
    total_pages: int = 0


class TagCount(BaseModel):
    model_config = ConfigDict(frozen=True)

    tag: str
    count: int


class ArchiveBucket(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Month key in YYYY-MM format")
    label: str
    count: int


class AdjacentPosts(BaseModel):
    previous: Post | None = None
    next: Post | None = None


class AuthorPage(BaseModel):
    author: Author
    posts: list[Post] = Field(default_factory=list)
