"""
Create Business Use Case
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.base import generate_uuid
from tenantgram.domain.entities import Business
from .branding import apply_fields, apply_images, super_admin_only
from .dtos import BusinessCommand, BusinessResponse


class CreateBusinessUseCase:
    """
    Use case for creating a business (tenant).

    Business Rules:
    - SUPER_ADMIN only
    - name is required
    - Logo and wallpaper are stored as private images of the new business;
      an invalid image rejects the whole request
    """

    def __init__(self, uow: UnitOfWork, file_service: FileService):
        self.uow = uow
        self.file_service = file_service

    async def execute(self, caller: Principal, command: BusinessCommand) -> Result[BusinessResponse]:
        error = super_admin_only(caller)
        if error:
            return Return.err(error)
        if not command.name or not command.name.strip():
            return Return.err(Error("VALIDATION_ERROR", "Business name is required"))

        async with self.uow:
            # Images are filed under the business id, so it is chosen up front
            business = Business(id=generate_uuid(), name=command.name)
            apply_fields(business, command)

            stored, error = await apply_images(
                self.uow, self.file_service, business, command, None
            )
            if error:
                return Return.err(error)

            business = await self.uow.businesses.create(business)
            await self.file_service.commit(self.uow, *stored)
            return Return.ok(BusinessResponse.model_validate(business))
