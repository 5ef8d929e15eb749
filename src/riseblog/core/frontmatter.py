"""Helpers for parsing YAML front-matter from MDX post documents."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml

from riseblog.exceptions import ContentError

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML front-matter using python-frontmatter.

    Args:
        content: Document text that may start with a front-matter block.

    Returns:
        Tuple of (metadata dict, body string).

    Raises:
        ContentError: If the front-matter is not valid YAML or is not a mapping.

    """
    try:
        parsed = frontmatter.loads(content)
    except (yaml.YAMLError, ValueError, TypeError) as exc:
        msg = f"Failed to parse front-matter: {exc}"
        raise ContentError(msg) from exc

    raw_metadata = parsed.metadata or {}
    if not isinstance(raw_metadata, dict):
        msg = f"Front-matter is not a mapping: {type(raw_metadata).__name__}"
        raise ContentError(msg)

    body = parsed.content if isinstance(parsed.content, str) else str(parsed.content)
    return dict(raw_metadata), body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a document and parse its front-matter.

    Raises:
        OSError: If the file cannot be read.
        UnicodeDecodeError: If the file is not valid text in ``encoding``.
        ContentError: If the front-matter cannot be parsed.

    """
    content = path.read_text(encoding=encoding)
    return parse_frontmatter(content)
