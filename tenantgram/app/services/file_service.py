"""
Media pipeline: validated, transcoded, content-hashed blob storage with
tenant-scoped metadata.
"""

import asyncio
import logging
from typing import Optional

from tenantgram.libs.result import Error
from tenantgram.app.services.file_storage import IFileStorage, StorageError
from tenantgram.app.services.media import (
    MediaError,
    UnsupportedMediaType,
    generate_stored_filename,
    process_upload,
)
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.base import utc_now
from tenantgram.domain.entities import FileMetadata, FileStatus

logger = logging.getLogger(__name__)


class FileService:
    """
    Stores uploads and records their metadata inside the caller's unit of work.

    Business Rules:
    - MIME type is sniffed from content, never taken from the client
    - Images must be JPEG, PNG or WebP and are re-encoded before storage
    - Every upload produces a new blob; the hash is recorded, not deduplicated
    - The metadata row is added only after the blob is on disk
    - The caller commits through FileService.commit, so a failed commit (or a
      failed flush of the row) removes the blob again
    """

    def __init__(self, storage: IFileStorage):
        self.storage = storage

    async def store(
        self,
        uow: UnitOfWork,
        data: bytes,
        original_filename: Optional[str],
        business_id: str,
        user_id: Optional[str],
        require_image: bool = True,
        public_access: bool = False,
    ) -> FileMetadata:
        """
        Raises:
            MediaError: content rejected or undecodable
            StorageError: blob could not be written
        """
        processed = await asyncio.to_thread(
            process_upload, data, original_filename, require_image
        )

        duplicates = await uow.files.list_by_hash(processed.file_hash)
        if duplicates:
            logger.info(
                f"Upload duplicates {len(duplicates)} stored file(s) with hash {processed.file_hash}"
            )

        stored_filename = generate_stored_filename(processed.extension)
        await self.storage.save_bytes(stored_filename, processed.data)

        metadata = FileMetadata(
            original_filename=original_filename,
            stored_filename=stored_filename,
            file_hash=processed.file_hash,
            mime_type=processed.mime_type,
            file_size=len(processed.data),
            uploaded_by=user_id,
            business_id=business_id or "",
            upload_date=utc_now(),
            file_type=processed.file_type,
            status=FileStatus.ACTIVE,
            public_access=public_access,
        )
        try:
            metadata = await uow.files.create(metadata)
        except Exception:
            await self.discard(metadata)
            raise
        logger.info(f"Stored {stored_filename} ({processed.mime_type}, {len(processed.data)} bytes)")
        return metadata

    async def commit(self, uow: UnitOfWork, *stored: Optional[FileMetadata]) -> None:
        """Commit the unit of work; the given blobs are deleted if the commit fails"""
        try:
            await uow.commit()
        except Exception:
            await self.discard(*stored)
            raise

    async def discard(self, *stored: Optional[FileMetadata]) -> None:
        """Best-effort removal of blobs whose metadata will never be committed"""
        for metadata in stored:
            if metadata is None:
                continue
            try:
                await self.storage.delete(metadata.stored_filename)
            except StorageError as e:
                logger.warning(f"Could not remove orphaned blob {metadata.stored_filename}: {e}")


def upload_error(exc: Exception) -> Error:
    """Translate a FileService.store failure into a use case error"""
    if isinstance(exc, UnsupportedMediaType):
        return Error("UNSUPPORTED_MEDIA_TYPE", str(exc))
    if isinstance(exc, MediaError):
        return Error("MEDIA_PROCESSING_FAILED", str(exc))
    return Error("STORAGE_ERROR", "Could not store file")
