"""
Upload File Use Case
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_service import FileService, upload_error
from tenantgram.app.services.file_storage import StorageError
from tenantgram.app.services.media import MediaError
from tenantgram.app.services.unit_of_work import UnitOfWork
from .dtos import FileMetadataResponse, UploadFileCommand


class UploadFileUseCase:
    """
    Use case for storing an uploaded file in the caller's business.

    Business Rules:
    - require_image=True accepts only JPEG, PNG and WebP (transcoded)
    - require_image=False accepts anything; images are still transcoded
    - Uploads are tenant-private
    """

    def __init__(self, uow: UnitOfWork, file_service: FileService):
        self.uow = uow
        self.file_service = file_service

    async def execute(
        self, caller: Principal, command: UploadFileCommand, require_image: bool = True
    ) -> Result[FileMetadataResponse]:
        if not command.data:
            return Return.err(Error("VALIDATION_ERROR", "File is empty"))

        async with self.uow:
            try:
                metadata = await self.file_service.store(
                    self.uow,
                    command.data,
                    command.filename,
                    business_id=caller.business_id or "",
                    user_id=caller.id,
                    require_image=require_image,
                )
            except (MediaError, StorageError) as e:
                return Return.err(upload_error(e))

            await self.file_service.commit(self.uow, metadata)
            return Return.ok(FileMetadataResponse.from_metadata(metadata))
