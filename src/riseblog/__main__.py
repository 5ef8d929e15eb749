"""Allow ``python -m riseblog``."""

from riseblog.cli.app import app

if __name__ == "__main__":
    app()
