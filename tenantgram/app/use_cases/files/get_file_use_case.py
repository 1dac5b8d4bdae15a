"""
Get File Use Cases

Serve a stored blob (or just its metadata) under the private or the public
access rule.
"""

import logging

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_storage import IFileStorage, StorageError
from tenantgram.app.services.unit_of_work import UnitOfWork
from .access import FILE_NOT_FOUND, find_active, private_access_error, public_access_error
from .dtos import FileContent, FileMetadataResponse

logger = logging.getLogger(__name__)


async def _read_content(
    storage: IFileStorage, stored_filename: str, mime_type: str
) -> Result[FileContent]:
    try:
        data = await storage.read_bytes(stored_filename)
    except StorageError as e:
        logger.error(f"Blob missing for {stored_filename}: {e}")
        return Return.err(FILE_NOT_FOUND)
    return Return.ok(
        FileContent(
            data=data,
            mime_type=mime_type,
            stored_filename=stored_filename,
        )
    )


class GetFileUseCase:
    """
    Business Rules:
    - Deleted or unknown files are 404
    - The caller's business must own the file
    - Content-Type is the MIME type sniffed at upload
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, caller: Principal, stored_filename: str) -> Result[FileContent]:
        async with self.uow:
            metadata, error = await find_active(self.uow, stored_filename)
            if error:
                return Return.err(error)
            error = private_access_error(caller, metadata)
            if error:
                return Return.err(error)
            mime_type = metadata.mime_type

        return await _read_content(self.storage, stored_filename, mime_type)


class GetPublicFileUseCase:
    """
    Business Rules:
    - No authentication; only files flagged public_access are served
    """

    def __init__(self, uow: UnitOfWork, storage: IFileStorage):
        self.uow = uow
        self.storage = storage

    async def execute(self, stored_filename: str) -> Result[FileContent]:
        async with self.uow:
            metadata, error = await find_active(self.uow, stored_filename)
            if error:
                return Return.err(error)
            error = public_access_error(metadata)
            if error:
                return Return.err(error)
            mime_type = metadata.mime_type

        return await _read_content(self.storage, stored_filename, mime_type)


class GetFileMetadataUseCase:
    """Metadata lookup under the private rule"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, stored_filename: str) -> Result[FileMetadataResponse]:
        async with self.uow:
            metadata, error = await find_active(self.uow, stored_filename)
            if error:
                return Return.err(error)
            error = private_access_error(caller, metadata)
            if error:
                return Return.err(error)
            return Return.ok(FileMetadataResponse.from_metadata(metadata))


class GetPublicFileMetadataUseCase:
    """Metadata lookup under the public rule"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, stored_filename: str) -> Result[FileMetadataResponse]:
        async with self.uow:
            metadata, error = await find_active(self.uow, stored_filename)
            if error:
                return Return.err(error)
            error = public_access_error(metadata)
            if error:
                return Return.err(error)
            return Return.ok(FileMetadataResponse.from_metadata(metadata))
