"""
List Files Use Case
"""

from typing import List

from tenantgram.libs.result import Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import FileStatus
from .dtos import FileMetadataResponse


class ListFilesUseCase:
    """Active files of the caller's business; a caller without one sees nothing"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal) -> Result[List[FileMetadataResponse]]:
        if not caller.business_id:
            return Return.ok([])

        async with self.uow:
            files = await self.uow.files.list_by_business_and_status(
                caller.business_id, FileStatus.ACTIVE
            )
            return Return.ok([FileMetadataResponse.from_metadata(f) for f in files])
