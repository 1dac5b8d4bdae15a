"""
Delete File Use Case
"""

from tenantgram.libs.result import Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import FileStatus
from .access import find_active, private_access_error


class DeleteFileUseCase:
    """
    Business Rules:
    - Soft delete: status becomes DELETED, the blob stays on disk
    - Only within the caller's business
    - Deleted files are no longer served
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, stored_filename: str) -> Result[None]:
        async with self.uow:
            metadata, error = await find_active(self.uow, stored_filename)
            if error:
                return Return.err(error)
            error = private_access_error(caller, metadata)
            if error:
                return Return.err(error)

            metadata.status = FileStatus.DELETED
            await self.uow.files.update(metadata)
            await self.uow.commit()
            return Return.ok(None)
