from typing import List, Optional

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.app.repositories.file_metadata_repository import IFileMetadataRepository
from tenantgram.domain.entities import FileMetadata, FileStatus


class FileMetadataRepository(IFileMetadataRepository):
    """FileMetadata repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_stored_filename(self, stored_filename: str) -> Optional[FileMetadata]:
        """Get file metadata by stored filename"""
        stmt = select(FileMetadata).where(FileMetadata.stored_filename == stored_filename)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_business_and_status(
        self, business_id: str, status: FileStatus
    ) -> List[FileMetadata]:
        stmt = (
            select(FileMetadata)
            .where(FileMetadata.business_id == business_id, FileMetadata.status == status)
            .order_by(col(FileMetadata.upload_date).desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_hash(self, file_hash: str) -> List[FileMetadata]:
        stmt = select(FileMetadata).where(FileMetadata.file_hash == file_hash)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, metadata: FileMetadata) -> FileMetadata:
        """Create a new file metadata row"""
        self.session.add(metadata)
        await self.session.flush()
        await self.session.refresh(metadata)
        return metadata

    async def update(self, metadata: FileMetadata) -> FileMetadata:
        """Update existing file metadata"""
        self.session.add(metadata)
        await self.session.flush()
        await self.session.refresh(metadata)
        return metadata
