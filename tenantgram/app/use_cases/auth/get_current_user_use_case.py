"""
Get Current User Use Case

Resolves the user behind a bearer token and echoes the token back.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.api.utils.jwt import JwtService, TokenError
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.users.dtos import UserResponse
from .dtos import LoginResponse


class GetCurrentUserUseCase:
    def __init__(self, uow: UnitOfWork, jwt_service: JwtService):
        self.uow = uow
        self.jwt_service = jwt_service

    async def execute(self, token: str) -> Result[LoginResponse]:
        try:
            email = self.jwt_service.subject(token)
        except TokenError:
            return Return.err(Error("INVALID_TOKEN", "Invalid token"))

        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found"))

            return Return.ok(
                LoginResponse(
                    message="User logged in successfully",
                    user=UserResponse.from_user(user),
                    token=token,
                )
            )
