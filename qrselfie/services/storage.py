from pathlib import Path

from starlette.concurrency import run_in_threadpool


class LocalStorage:
    """Flat directory of uploaded photo files, keyed by filename."""

    def __init__(self, base: Path):
        self.base = Path(base)
        self.base.mkdir(parents=True, exist_ok=True)

    def path_for(self, filename: str) -> Path:
        path = (self.base / filename).resolve()
        if path.parent != self.base.resolve():
            raise ValueError(f"Refusing to store outside uploads dir: {filename!r}")
        return path

    def save(self, filename: str, data: bytes) -> Path:
        path = self.path_for(filename)
        with open(path, "wb") as f:
            f.write(data)
        return path

    async def save_async(self, filename: str, data: bytes) -> Path:
        return await run_in_threadpool(self.save, filename, data)

    def read(self, filename: str) -> bytes:
        return self.path_for(filename).read_bytes()

    def exists(self, filename: str) -> bool:
        return self.path_for(filename).exists()
