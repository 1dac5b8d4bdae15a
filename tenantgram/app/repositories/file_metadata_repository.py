from abc import ABC, abstractmethod
from typing import List, Optional

from tenantgram.domain.entities import FileMetadata, FileStatus


class IFileMetadataRepository(ABC):
    """FileMetadata repository interface - application layer"""

    @abstractmethod
    async def get_by_stored_filename(self, stored_filename: str) -> Optional[FileMetadata]:
        """Get metadata by stored filename"""
        pass

    @abstractmethod
    async def list_by_business_and_status(
        self, business_id: str, status: FileStatus
    ) -> List[FileMetadata]:
        """List a business's files in a given status"""
        pass

    @abstractmethod
    async def list_by_hash(self, file_hash: str) -> List[FileMetadata]:
        """List files sharing a content hash"""
        pass

    @abstractmethod
    async def create(self, metadata: FileMetadata) -> FileMetadata:
        """Create new file metadata"""
        pass

    @abstractmethod
    async def update(self, metadata: FileMetadata) -> FileMetadata:
        """Update existing file metadata"""
        pass
