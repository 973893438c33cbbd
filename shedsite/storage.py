"""
Bucket-scoped object storage on the local filesystem.

Each bucket is a directory under ``UPLOAD_FOLDER``. Stored objects are served
back by the public ``/uploads/<bucket>/<path>`` route.
"""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Tuple

from flask import current_app, url_for
from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

log = logging.getLogger(__name__)

# Bucket holding every uploaded image (listings, projects, blog, home, inspiration)
IMAGES_BUCKET = "images"


class StorageError(Exception):
    """Base error for storage operations."""


class BucketNotFoundError(StorageError):
    def __init__(self, bucket: str, available: List[str]):
        self.bucket = bucket
        self.available = available
        names = ", ".join(available) or "none"
        super().__init__(
            f"Storage bucket '{bucket}' not found. Available buckets: {names}. "
            "Please verify the bucket name and permissions."
        )


class UploadError(StorageError):
    """Raised when a file could not be written to its bucket."""


@dataclass
class LocalStorage:
    """Filesystem storage client."""

    root: Path

    def __post_init__(self):
        self.root = Path(self.root)

    def list_buckets(self) -> List[str]:
        if not self.root.exists():
            return []
        return sorted(p.name for p in self.root.iterdir() if p.is_dir())

    def ensure_bucket(self, bucket: str) -> Path:
        path = self.root / bucket
        path.mkdir(parents=True, exist_ok=True)
        return path

    def bucket_path(self, bucket: str) -> Path:
        path = self.root / bucket
        if not path.is_dir():
            available = self.list_buckets()
            log.warning("Bucket %s missing, available: %s", bucket, available)
            raise BucketNotFoundError(bucket, available)
        return path

    def upload(self, bucket: str, path: str, file: FileStorage) -> str:
        """Store ``file`` at ``bucket/path`` (overwriting) and return ``path``."""
        base = self.bucket_path(bucket)
        target = (base / path).resolve()
        if base.resolve() not in target.parents:
            raise UploadError(f"Upload failed: invalid path '{path}'")

        log.info("Uploading %s to bucket %s", path, bucket)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            file.save(str(target))
        except OSError as e:
            log.error("Upload of %s failed: %s", path, e)
            raise UploadError(f"Upload failed: {e}") from e
        return path

    def upload_many(
        self, bucket: str, prefix: str, files: Iterable[FileStorage]
    ) -> Tuple[List[str], List[Tuple[str, StorageError]]]:
        """Upload files one after the other.

        Returns (stored_paths, failures) where failures holds (filename, error)
        pairs. A failed file does not undo the files stored before it.
        """
        stored: List[str] = []
        errors: List[Tuple[str, StorageError]] = []
        for f in files:
            if not f or not f.filename:
                continue
            name = make_object_name(prefix, f.filename)
            try:
                stored.append(self.upload(bucket, name, f))
            except StorageError as e:
                errors.append((f.filename, e))
        return stored, errors


def make_object_name(prefix: str, filename: str) -> str:
    """``<prefix>/<epoch-ms>-<8 hex chars>-<secure filename>``"""
    safe = secure_filename(filename) or "upload"
    return f"{prefix}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe}"


def get_storage() -> LocalStorage:
    return current_app.extensions["shedsite.storage"]


def public_url(bucket: str, path: str | None) -> str:
    """Public URL for a stored object ("" when there is no path)."""
    if not path:
        return ""
    if path.startswith(("http://", "https://", "/")):
        return path
    return url_for("frontend.uploaded_file", bucket=bucket, path=path)


def upload_error_message(filename: str, error: StorageError) -> str:
    """User-facing text for a failed upload."""
    if isinstance(error, BucketNotFoundError):
        return f"Storage Setup Required: {error} This is a one-time setup step."
    return f"Failed to upload {filename}: {error}"
