"""
Delete Business Use Case

Soft delete: the deleted flag is set and every member request is blocked
from then on, except those of SUPER_ADMIN.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from .branding import super_admin_only


class DeleteBusinessUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, business_id: str) -> Result[None]:
        error = super_admin_only(caller)
        if error:
            return Return.err(error)

        async with self.uow:
            business = await self.uow.businesses.get_by_id(business_id)
            if business is None:
                return Return.err(Error("BUSINESS_NOT_FOUND", "Business not found"))

            business.deleted = True
            await self.uow.businesses.update(business)
            await self.uow.commit()
            return Return.ok(None)
