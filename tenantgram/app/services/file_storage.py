from abc import ABC, abstractmethod


class StorageError(RuntimeError):
    pass


class IFileStorage(ABC):
    """Blob storage under a single root, addressed by stored filename"""

    @abstractmethod
    async def save_bytes(self, stored_filename: str, data: bytes) -> None:
        """Write a whole file"""
        pass

    @abstractmethod
    async def read_bytes(self, stored_filename: str) -> bytes:
        """Read a whole file. Raises StorageError if missing."""
        pass

    @abstractmethod
    async def exists(self, stored_filename: str) -> bool:
        pass

    @abstractmethod
    async def delete(self, stored_filename: str) -> None:
        """Remove a file; a missing file is not an error"""
        pass
