"""Storage module for scratch files."""

from app.storage.uploads import scoped_upload

__all__ = ["scoped_upload"]
