"""
List Businesses Use Case
"""

from typing import List

from tenantgram.libs.result import Result, Return
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.unit_of_work import UnitOfWork
from .branding import super_admin_only
from .dtos import BusinessResponse


class ListBusinessesUseCase:
    """SUPER_ADMIN only; soft-deleted businesses are left out"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal) -> Result[List[BusinessResponse]]:
        error = super_admin_only(caller)
        if error:
            return Return.err(error)

        async with self.uow:
            businesses = await self.uow.businesses.list_active()
            return Return.ok([BusinessResponse.model_validate(b) for b in businesses])
