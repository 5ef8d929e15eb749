"""Command line interface."""

from riseblog.cli.app import app

__all__ = ["app"]
