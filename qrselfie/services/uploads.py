"""
Upload pipeline: pick an id and extension, write the file, then record it.

The file is written before the manifest entry. A crash or failed persist in
between leaves an orphaned file, never a record pointing at nothing.
"""

import logging
import time
from pathlib import PurePath
from typing import Optional, Set

from slugify import slugify

from qrselfie.errors import InternalError
from qrselfie.schemas.photo import PhotoRecord
from qrselfie.services.manifest import ManifestStore
from qrselfie.services.storage import LocalStorage
from qrselfie.services.tokens import generate_photo_id

logger = logging.getLogger(__name__)

DEFAULT_EXT = ".jpg"
# Longest extension taken from a client filename, dot excluded
MAX_EXT_LEN = 10

MIME_TO_EXT = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
    "image/heic": ".heic",
    "image/heif": ".heif",
}


def choose_extension(content_type: Optional[str], filename: Optional[str]) -> str:
    ext = MIME_TO_EXT.get((content_type or "").split(";")[0].strip().lower())
    if ext:
        return ext
    suffix = slugify(PurePath(filename or "").suffix.lstrip("."))
    if suffix and len(suffix) <= MAX_EXT_LEN:
        return "." + suffix
    return DEFAULT_EXT


class UploadService:
    def __init__(self, manifest: ManifestStore, storage: LocalStorage, id_length: int = 10, max_attempts: int = 5):
        self.manifest = manifest
        self.storage = storage
        self.id_length = id_length
        self.max_attempts = max_attempts
        # ids handed out whose file write is still in progress
        self._pending: Set[str] = set()

    def _reserve_id(self) -> str:
        for _ in range(self.max_attempts):
            photo_id = generate_photo_id(self.id_length)
            if photo_id not in self.manifest and photo_id not in self._pending:
                self._pending.add(photo_id)
                return photo_id
            logger.warning("Photo id collision on %s; regenerating", photo_id)
        raise InternalError("Upload failed")

    async def store(self, content: bytes, content_type: Optional[str], filename: Optional[str]) -> PhotoRecord:
        photo_id = self._reserve_id()
        try:
            stored_name = photo_id + choose_extension(content_type, filename)
            await self.storage.save_async(stored_name, content)
            record = PhotoRecord(id=photo_id, filename=stored_name, created_at=int(time.time() * 1000))
            try:
                self.manifest.add(record)
            except Exception:
                logger.error("Manifest persist failed; %s is orphaned", stored_name)
                raise
        finally:
            self._pending.discard(photo_id)
        logger.info("Stored photo %s (%d bytes)", stored_name, len(content))
        return record
