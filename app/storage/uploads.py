"""Scratch storage for uploaded videos.

Uploaded files are written under the configured upload directory with a
unique name and always removed once the caller is done with them.
"""

import logging
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def _safe_suffix(filename: str) -> str:
    suffix = Path(filename or "").suffix.lower()
    return suffix if suffix.isascii() and len(suffix) <= 10 else ""


@contextmanager
def scoped_upload(upload_dir: str, filename: str, data: bytes) -> Iterator[Path]:
    """Write ``data`` to a scratch file and delete it on exit.

    Deletion is best-effort: errors while removing the file are logged
    and ignored.

    Args:
        upload_dir: Directory for scratch files (created if missing)
        filename: Original client filename, only its extension is kept
        data: File contents

    Yields:
        Path of the scratch file
    """
    directory = Path(upload_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{uuid.uuid4().hex}{_safe_suffix(filename)}"

    try:
        path.write_bytes(data)
        logger.debug(f"Stored upload {filename!r} at {path} ({len(data)} bytes)")
        yield path
    finally:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.debug(f"Could not remove scratch upload {path}: {e}")
