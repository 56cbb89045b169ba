"""Local storage for uploaded memory photos."""

import logging
import os
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


def build_media_name(original_filename: str | None) -> str:
    """Return a unique stored file name keeping the upload's extension."""
    suffix = Path(original_filename or "").suffix.lower()
    return f"{uuid.uuid4().hex}{suffix}"


def save_media(storage_dir: str, original_filename: str | None, content: bytes) -> tuple[str, str]:
    """
    Write an uploaded photo to storage_dir.

    Returns:
        (media, media_path): the stored file name and its absolute path
    """
    os.makedirs(storage_dir, exist_ok=True)
    media = build_media_name(original_filename)
    media_path = Path(storage_dir).resolve() / media
    media_path.write_bytes(content)
    logger.info("Stored %d bytes for %r at %s", len(content), original_filename, media_path)
    return media, str(media_path)


def remove_media(media_path: str) -> None:
    """Best-effort removal of a stored photo."""
    try:
        os.remove(media_path)
    except OSError as e:
        logger.warning("Failed to delete file %s: %s", media_path, e)
