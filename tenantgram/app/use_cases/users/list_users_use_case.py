"""
List Users Use Case

Lists the users visible to an administrator.
"""

from typing import List

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.authorization import Principal, is_admin, is_super_admin
from tenantgram.app.services.unit_of_work import UnitOfWork
from .dtos import UserResponse


class ListUsersUseCase:
    """
    Business Rules:
    - SUPER_ADMIN sees every user
    - ADMIN sees the users of their own business
    - Everyone else is refused
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, caller: Principal) -> Result[List[UserResponse]]:
        async with self.uow:
            if is_super_admin(caller):
                users = await self.uow.users.list_all()
            elif is_admin(caller):
                if not caller.business_id:
                    return Return.ok([])
                users = await self.uow.users.list_by_business(caller.business_id)
            else:
                return Return.err(
                    Error("INSUFFICIENT_ROLE", "Only administrators can list users")
                )

            return Return.ok([UserResponse.from_user(u) for u in users])
