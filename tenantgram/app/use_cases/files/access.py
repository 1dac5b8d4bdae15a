"""
Shared lookup and access checks for stored files.
"""

from typing import Optional, Tuple

from tenantgram.libs.result import Error
from tenantgram.app.services.authorization import Principal, same_tenant
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import FileMetadata, FileStatus

FILE_NOT_FOUND = Error("FILE_NOT_FOUND", "File not found")


async def find_active(
    uow: UnitOfWork, stored_filename: str
) -> Tuple[Optional[FileMetadata], Optional[Error]]:
    metadata = await uow.files.get_by_stored_filename(stored_filename)
    if metadata is None or metadata.status == FileStatus.DELETED:
        return None, FILE_NOT_FOUND
    return metadata, None


def private_access_error(caller: Principal, metadata: FileMetadata) -> Optional[Error]:
    if not same_tenant(caller, metadata.business_id):
        return Error("CROSS_TENANT_ACCESS", "Access denied")
    return None


def public_access_error(metadata: FileMetadata) -> Optional[Error]:
    if not metadata.public_access:
        return Error("ACCESS_DENIED", "File is not public")
    return None
