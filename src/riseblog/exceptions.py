"""Centralized exceptions for the riseblog content layer."""


class RiseBlogError(Exception):
    """Base exception for all riseblog errors."""


class ConfigurationError(RiseBlogError):
    """Raised when the configuration file cannot be used."""


class ContentError(RiseBlogError):
    """Base exception for per-document content faults.

    The loader catches these, logs them and skips the offending post.
    """


class MalformedPostError(ContentError):
    """Raised when a post document is missing required data or has invalid values."""

    def __init__(self, directory_slug: str, reason: str) -> None:
        self.directory_slug = directory_slug
        self.reason = reason
        super().__init__(f"Malformed post '{directory_slug}': {reason}")


class InvalidInputError(RiseBlogError):
    """Raised when the input to a function is invalid."""


class UnsupportedLocaleError(InvalidInputError, ValueError):
    """Raised when a locale code is not one of the supported locales."""

    def __init__(self, code: object) -> None:
        self.code = code
        super().__init__(f"Unsupported locale: {code!r}")
