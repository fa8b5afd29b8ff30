from dataclasses import dataclass

from fastapi import Request

from qrselfie.config import Settings
from qrselfie.services.manifest import ManifestStore
from qrselfie.services.network import resolve_base_url
from qrselfie.services.storage import LocalStorage
from qrselfie.services.uploads import UploadService


@dataclass
class AppContext:
    """Process-wide state shared by every request handler."""

    settings: Settings
    manifest: ManifestStore
    storage: LocalStorage
    uploads: UploadService
    base_url: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        for d in (settings.PUBLIC_DIR, settings.UPLOADS_DIR, settings.DATA_DIR):
            d.mkdir(parents=True, exist_ok=True)

        manifest = ManifestStore(settings.manifest_path, strict=settings.MANIFEST_STRICT)
        manifest.load()
        storage = LocalStorage(settings.UPLOADS_DIR)
        uploads = UploadService(
            manifest,
            storage,
            id_length=settings.ID_LENGTH,
            max_attempts=settings.ID_MAX_ATTEMPTS,
        )
        return cls(
            settings=settings,
            manifest=manifest,
            storage=storage,
            uploads=uploads,
            base_url=resolve_base_url(settings.PUBLIC_BASE_URL, settings.PORT),
        )

    def view_url(self, photo_id: str) -> str:
        return f"{self.base_url}/view/{photo_id}"

    @staticmethod
    def image_url(filename: str) -> str:
        return f"/uploads/{filename}"


def get_context(request: Request) -> AppContext:
    return request.app.state.ctx
