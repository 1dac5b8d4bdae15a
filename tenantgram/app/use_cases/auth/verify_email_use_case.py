"""
Verify Email Use Case

Marks a user's email as verified via the emailed token.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.tokens import hash_token
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.common import MessageResponse


class VerifyEmailUseCase:
    """
    Use case for email verification.

    Business Rules:
    - Token must exist and not be expired (24 h)
    - Sets email_verified and deletes the token
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, token: str) -> Result[MessageResponse]:
        async with self.uow:
            verification_token = await self.uow.email_verification_tokens.get_by_token_hash(
                hash_token(token)
            )
            if verification_token is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid verification token."))

            if verification_token.is_expired():
                return Return.err(
                    Error(
                        "TOKEN_EXPIRED",
                        "Verification token has expired. Please request a new one.",
                    )
                )

            user = await self.uow.users.get_by_id(verification_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found."))

            user.email_verified = True
            await self.uow.users.update(user)
            await self.uow.email_verification_tokens.delete(verification_token)
            await self.uow.commit()

        return Return.ok(
            MessageResponse(
                message="Email verified successfully! You can now log in to your account."
            )
        )
