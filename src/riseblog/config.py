"""Configuration for the riseblog content layer.

Settings come from three places, highest priority first:

1. Environment variables (``RISEBLOG_SECTION__KEY``, e.g. ``RISEBLOG_CONTENT__DEVELOPMENT``)
2. The ``.riseblog.toml`` file in the site root
3. Defaults declared below

The only setting that changes query results at runtime is
``content.development``: drafts are visible while it is on.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from riseblog.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".riseblog.toml"
ENV_PREFIX = "RISEBLOG_"

DEFAULT_WORDS_PER_MINUTE = 200
DEFAULT_PAGE_SIZE = 6
DEFAULT_RELATED_LIMIT = 3


def _deep_merge(destination: dict[str, Any], source: Mapping[str, Any]) -> dict[str, Any]:
    """Merge source into destination, with source values overwriting."""
    for key, value in source.items():
        if isinstance(value, Mapping) and isinstance(destination.get(key), Mapping):
            destination[key] = _deep_merge(dict(destination[key]), value)
        else:
            destination[key] = value
    return destination


class PathsSettings(BaseModel):
    """Content locations.

    All paths are relative to ``site_root`` unless absolute.
    """

    site_root: Path = Field(
        default_factory=Path.cwd,
        description="Root directory of the site (defaults to current working directory)",
    )
    posts_dir: Path = Field(default=Path("src/content/blog"), description="One directory per post")
    authors_dir: Path = Field(default=Path("src/content/authors"), description="Author JSON records")
    tags_dir: Path = Field(default=Path("src/content/tags"), description="Tag JSON records")
    index_filename: str = Field(default="index.mdx", description="Canonical document inside each post directory")

    @property
    def abs_posts_dir(self) -> Path:
        return self._resolve(self.posts_dir)

    @property
    def abs_authors_dir(self) -> Path:
        return self._resolve(self.authors_dir)

    @property
    def abs_tags_dir(self) -> Path:
        return self._resolve(self.tags_dir)

    def _resolve(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return self.site_root / path


class ContentSettings(BaseModel):
    """Behaviour of the loader and the query helpers."""

    development: bool = Field(default=False, description="Show draft posts")
    words_per_minute: int = Field(default=DEFAULT_WORDS_PER_MINUTE, ge=1)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1)
    related_limit: int = Field(default=DEFAULT_RELATED_LIMIT, ge=0)
    cache_enabled: bool = Field(default=False, description="Reuse collections while the content root is unchanged")


class BlogConfig(BaseSettings):
    """Root configuration."""

    paths: PathsSettings = Field(default_factory=PathsSettings)
    content: ContentSettings = Field(default_factory=ContentSettings)

    model_config = SettingsConfigDict(
        extra="ignore",
        env_prefix=ENV_PREFIX,
        env_nested_delimiter="__",
    )

    @classmethod
    def load(cls, site_root: Path | None = None) -> BlogConfig:
        """Load configuration from ``.riseblog.toml`` and environment variables.

        Raises:
            ConfigurationError: If the TOML file cannot be parsed, or the file or
                environment holds a value that fails validation.

        """
        root_path = site_root if site_root is not None else Path.cwd()
        config_file = root_path / CONFIG_FILENAME

        file_settings: dict[str, Any] = {}
        if config_file.is_file():
            try:
                with config_file.open("rb") as f:
                    file_settings = tomllib.load(f)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {config_file}: {exc}"
                raise ConfigurationError(msg) from exc
            logger.debug("Loaded configuration from %s", config_file)

        # pydantic-settings gives __init__ arguments precedence over the
        # environment, so the env values are dumped and merged on top.
        try:
            env_settings = cls().model_dump(exclude_unset=True)
        except ValidationError as exc:
            msg = f"Invalid {ENV_PREFIX}* environment settings: {exc}"
            raise ConfigurationError(msg) from exc

        merged = _deep_merge(file_settings, env_settings)
        paths = merged.get("paths", {})
        if not isinstance(paths, Mapping):
            msg = f"[paths] in {config_file} must be a table"
            raise ConfigurationError(msg)
        merged["paths"] = {**paths, "site_root": root_path}

        try:
            return cls.model_validate(merged)
        except ValidationError as exc:
            msg = f"Invalid configuration in {config_file}: {exc}"
            raise ConfigurationError(msg) from exc
