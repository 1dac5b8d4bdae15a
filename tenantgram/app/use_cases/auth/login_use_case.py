"""
Login Use Case

Handles email/password authentication and returns a bearer token.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.passwords import verify_password
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.users.dtos import UserResponse
from .dtos import LoginResponse


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Unknown email and wrong password fail identically (no enumeration)
    - Constant-time password comparison; unknown users still pay for a hash check
    - Email verification is not required to log in
    """

    def __init__(self, uow: UnitOfWork, jwt_service: JwtService):
        self.uow = uow
        self.jwt_service = jwt_service

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse containing token and user, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            password_hash = user.password_hash if user is not None else None
            if not verify_password(password, password_hash) or user is None:
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            token = self.jwt_service.issue(user)
            return Return.ok(
                LoginResponse(
                    message="User logged in successfully",
                    user=UserResponse.from_user(user),
                    token=token,
                )
            )
