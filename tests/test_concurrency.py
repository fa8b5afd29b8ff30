import asyncio
import json

import httpx
import pytest

from qrselfie.services.manifest import ManifestStore

UPLOADS = 40


@pytest.mark.asyncio
async def test_concurrent_uploads_all_recorded(app, settings, jpeg_bytes):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        async def one(i):
            files = {"photo": (f"{i}.jpg", jpeg_bytes + bytes([i]), "image/jpeg")}
            return await ac.post("/api/upload", files=files)

        responses = await asyncio.gather(*(one(i) for i in range(UPLOADS)))

    assert all(r.status_code == 200 for r in responses)
    ids = [r.json()["id"] for r in responses]
    assert len(set(ids)) == UPLOADS

    manifest = app.state.ctx.manifest
    assert set(manifest.ids()) == set(ids)

    on_disk = json.loads(settings.manifest_path.read_text())
    assert set(on_disk) == set(ids)

    reloaded = ManifestStore(settings.manifest_path)
    reloaded.load()
    for photo_id in ids:
        rec = reloaded.get(photo_id)
        assert (settings.UPLOADS_DIR / rec.filename).exists()


@pytest.mark.asyncio
async def test_id_collision_regenerates(app, jpeg_bytes, monkeypatch):
    from qrselfie.services import uploads

    service = app.state.ctx.uploads
    first = await service.store(jpeg_bytes, "image/jpeg", "a.jpg")

    candidates = iter([first.id, first.id, "freshid001"])
    monkeypatch.setattr(uploads, "generate_photo_id", lambda length: next(candidates))

    second = await service.store(jpeg_bytes, "image/jpeg", "b.jpg")
    assert second.id == "freshid001"
    assert len(app.state.ctx.manifest) == 2


@pytest.mark.asyncio
async def test_id_collision_gives_up(app, jpeg_bytes, monkeypatch):
    from qrselfie.errors import InternalError
    from qrselfie.services import uploads

    service = app.state.ctx.uploads
    first = await service.store(jpeg_bytes, "image/jpeg", "a.jpg")
    monkeypatch.setattr(uploads, "generate_photo_id", lambda length: first.id)

    with pytest.raises(InternalError):
        await service.store(jpeg_bytes, "image/jpeg", "b.jpg")
    assert len(app.state.ctx.manifest) == 1
