"""
Update Business Use Case
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal, is_admin, is_super_admin, same_tenant
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.unit_of_work import UnitOfWork
from .branding import apply_fields, apply_images
from .dtos import BusinessCommand, BusinessResponse


class UpdateBusinessUseCase:
    """
    Use case for updating a business.

    Business Rules:
    - SUPER_ADMIN may update any business
    - ADMIN may update only their own business
    - Only SUPER_ADMIN may change the deleted flag ("true" / "false")
    - Only provided fields change
    """

    def __init__(self, uow: UnitOfWork, file_service: FileService):
        self.uow = uow
        self.file_service = file_service

    async def execute(
        self, caller: Principal, business_id: str, command: BusinessCommand
    ) -> Result[BusinessResponse]:
        async with self.uow:
            business = await self.uow.businesses.get_by_id(business_id)
            if business is None:
                return Return.err(Error("BUSINESS_NOT_FOUND", "Business not found"))

            if not is_super_admin(caller):
                if not is_admin(caller):
                    return Return.err(
                        Error("INSUFFICIENT_ROLE", "Only administrators can update a business")
                    )
                if not same_tenant(caller, business.id):
                    return Return.err(
                        Error("CROSS_TENANT_ACCESS", "You can only update your own business")
                    )
                if command.deleted is not None:
                    return Return.err(
                        Error("INSUFFICIENT_ROLE", "Only super admins can change the deleted flag")
                    )

            apply_fields(business, command)

            if command.deleted == "true":
                business.deleted = True
            elif command.deleted == "false":
                business.deleted = False

            stored, error = await apply_images(
                self.uow, self.file_service, business, command, caller.id
            )
            if error:
                return Return.err(error)

            business = await self.uow.businesses.update(business)
            await self.file_service.commit(self.uow, *stored)
            return Return.ok(BusinessResponse.model_validate(business))
