"""
Get Business Info Use Case
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal, same_tenant
from tenantgram.app.services.unit_of_work import UnitOfWork
from .dtos import BusinessInfoResponse


class GetBusinessInfoUseCase:
    """
    Business Rules:
    - Caller must belong to the requested business
    - Administrative fields (admin id, deleted flag) are not exposed
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal, business_id: str) -> Result[BusinessInfoResponse]:
        if not same_tenant(caller, business_id):
            return Return.err(Error("CROSS_TENANT_ACCESS", "Access denied"))

        async with self.uow:
            business = await self.uow.businesses.get_by_id(business_id)
            if business is None:
                return Return.err(Error("BUSINESS_NOT_FOUND", "Business not found"))

            return Return.ok(BusinessInfoResponse.model_validate(business))
