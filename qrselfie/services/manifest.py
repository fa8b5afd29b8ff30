"""
Manifest store: the persisted id -> PhotoRecord mapping.

The whole mapping lives in memory and is rewritten to a single JSON file on
every change. Mutations go through ``add`` which holds a lock across the
in-memory update and the file rewrite.
"""

import json
import logging
import os
import threading
import time
from pathlib import Path
from typing import Dict, Iterator, Optional

from pydantic import ValidationError as PydanticValidationError

from qrselfie.schemas.photo import PhotoRecord

logger = logging.getLogger(__name__)


class ManifestCorruptError(RuntimeError):
    pass


class ManifestStore:
    def __init__(self, path: Path, strict: bool = False):
        self.path = Path(path)
        self.strict = strict
        self._records: Dict[str, PhotoRecord] = {}
        self._lock = threading.Lock()

    def load(self) -> Dict[str, PhotoRecord]:
        """Replace the in-memory mapping with the file's contents.

        A missing file yields an empty mapping. A corrupt file raises
        ``ManifestCorruptError`` in strict mode; otherwise it is moved aside
        and the store starts empty. Read errors such as a denied permission
        propagate unchanged.
        """
        self._records = {}
        if not self.path.exists():
            logger.info("No manifest at %s; starting empty", self.path)
            return dict(self._records)

        data = self.path.read_bytes()
        try:
            raw = json.loads(data)
            if not isinstance(raw, dict):
                raise ValueError(f"expected a JSON object, got {type(raw).__name__}")
        except ValueError as e:
            if self.strict:
                raise ManifestCorruptError(f"Unreadable manifest {self.path}: {e}") from e
            backup = self.path.with_name(f"{self.path.name}.corrupt-{int(time.time() * 1000)}")
            os.replace(self.path, backup)
            logger.warning("Manifest %s is unreadable (%s); moved to %s and starting empty", self.path, e, backup)
            return dict(self._records)

        for photo_id, entry in raw.items():
            try:
                self._records[photo_id] = PhotoRecord.model_validate({**entry, "id": photo_id})
            except (TypeError, PydanticValidationError) as e:
                logger.warning("Skipping bad manifest entry %r: %s", photo_id, e)

        logger.info("Loaded %d manifest entries from %s", len(self._records), self.path)
        return dict(self._records)

    def save(self) -> None:
        payload = {pid: rec.to_manifest() for pid, rec in self._records.items()}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        os.replace(tmp, self.path)

    def add(self, record: PhotoRecord) -> None:
        with self._lock:
            self._records[record.id] = record
            try:
                self.save()
            except Exception:
                # keep memory in step with what is on disk
                self._records.pop(record.id, None)
                raise

    def get(self, photo_id: str) -> Optional[PhotoRecord]:
        return self._records.get(photo_id)

    def ids(self) -> Iterator[str]:
        return iter(list(self._records))

    def __contains__(self, photo_id: object) -> bool:
        return photo_id in self._records

    def __len__(self) -> int:
        return len(self._records)
