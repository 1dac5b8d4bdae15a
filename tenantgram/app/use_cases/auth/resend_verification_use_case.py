"""
Resend Verification Use Case

Re-issues the email verification link.
"""

import logging

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.email_service import EmailError, IEmailService
from tenantgram.app.services.tokens import new_opaque_token, verification_link
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.common import MessageResponse
from tenantgram.domain.base import utc_now
from tenantgram.domain.entities import EmailVerificationToken
from .register_use_case import VERIFICATION_TOKEN_TTL

logger = logging.getLogger(__name__)


class ResendVerificationUseCase:
    """
    Use case for resending the verification email.

    Business Rules:
    - Unknown email: USER_NOT_FOUND
    - Already verified: ALREADY_VERIFIED
    - The previous token of the user is deleted before a new one is issued
    - New token expires in 24 hours
    """

    def __init__(self, uow: UnitOfWork, email_service: IEmailService, server_name: str):
        self.uow = uow
        self.email_service = email_service
        self.server_name = server_name

    async def execute(self, email: str) -> Result[MessageResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found."))

            if user.email_verified:
                return Return.err(Error("ALREADY_VERIFIED", "Email is already verified."))

            existing = await self.uow.email_verification_tokens.get_by_user_id(user.id)
            if existing is not None:
                await self.uow.email_verification_tokens.delete(existing)

            raw_token, token_hash = new_opaque_token()
            await self.uow.email_verification_tokens.create(
                EmailVerificationToken(
                    user_id=user.id,
                    token_hash=token_hash,
                    expires_at=utc_now() + VERIFICATION_TOKEN_TTL,
                )
            )
            await self.uow.commit()
            recipient = user.email

        link = verification_link(self.server_name, raw_token)
        try:
            await self.email_service.send_email(
                recipient,
                "Email Verification",
                "Please verify your email by clicking the following link "
                f"(expires in 24 hours):\n{link}",
            )
        except EmailError as e:
            logger.error(f"Failed to send verification email to {recipient}: {e}")
            return Return.err(
                Error("EMAIL_SEND_FAILED", "Failed to send verification email.")
            )

        return Return.ok(MessageResponse(message="Verification email sent successfully."))
