"""Object storage for look images.

The rest of the service only consumes the public URL returned by ``store``.
"""
import logging
import os
from pathlib import Path

from errors import StoreUnavailable

logger = logging.getLogger(__name__)

STORAGE_DIR = os.getenv("STORAGE_DIR", "./uploads")
STORAGE_PUBLIC_URL = os.getenv("STORAGE_PUBLIC_URL", "/uploads")
STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "production-images")


class LocalObjectStorage:
    """Writes objects under ``<root>/<bucket>/`` and serves them from ``<public_url>/<bucket>/``."""

    def __init__(
        self,
        root: str = STORAGE_DIR,
        public_url: str = STORAGE_PUBLIC_URL,
        bucket: str = STORAGE_BUCKET,
    ):
        self.root = Path(root)
        self.public_url = public_url.rstrip("/")
        self.bucket = bucket

    def store(self, path: str, data: bytes) -> str:
        relative = Path(path)
        if relative.is_absolute() or ".." in relative.parts:
            raise ValueError(f"Invalid object path: {path}")

        target = self.root / self.bucket / relative
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as e:
            logger.error(f"Failed to store object {path}: {str(e)}")
            raise StoreUnavailable(f"Could not store {path}: {e}") from e

        logger.info(f"Stored {len(data)} bytes at {target}")
        return f"{self.public_url}/{self.bucket}/{relative.as_posix()}"


def get_storage() -> LocalObjectStorage:
    """FastAPI dependency returning the configured object storage."""
    return LocalObjectStorage()
