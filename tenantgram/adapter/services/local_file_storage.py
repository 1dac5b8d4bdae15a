import asyncio
import logging
from pathlib import Path

from tenantgram.app.services.file_storage import IFileStorage, StorageError

logger = logging.getLogger(__name__)


class LocalFileStorage(IFileStorage):
    """Blobs as flat files under a single upload root."""

    def __init__(self, base_path: str = "uploads"):
        self.base_path = Path(base_path).resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _full_path(self, stored_filename: str) -> Path:
        path = (self.base_path / stored_filename).resolve()
        if path.parent != self.base_path:
            raise StorageError(f"Invalid stored filename: {stored_filename!r}")
        return path

    def _write(self, path: Path, data: bytes) -> None:
        with open(path, "wb") as f:
            f.write(data)

    def _read(self, path: Path) -> bytes:
        with open(path, "rb") as f:
            return f.read()

    def _unlink(self, path: Path) -> None:
        path.unlink(missing_ok=True)

    async def save_bytes(self, stored_filename: str, data: bytes) -> None:
        path = self._full_path(stored_filename)
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as e:
            raise StorageError(f"Could not store {stored_filename}: {e}") from e
        logger.info(f"File stored: {path}")

    async def read_bytes(self, stored_filename: str) -> bytes:
        path = self._full_path(stored_filename)
        try:
            return await asyncio.to_thread(self._read, path)
        except OSError as e:
            raise StorageError(f"Could not read {stored_filename}: {e}") from e

    async def exists(self, stored_filename: str) -> bool:
        try:
            return self._full_path(stored_filename).is_file()
        except StorageError:
            return False

    async def delete(self, stored_filename: str) -> None:
        path = self._full_path(stored_filename)
        try:
            await asyncio.to_thread(self._unlink, path)
        except OSError as e:
            raise StorageError(f"Could not delete {stored_filename}: {e}") from e
        logger.info(f"File deleted: {path}")
