"""
Request Password Reset Use Case

Handles generating and emailing password reset links.
"""

import logging
from datetime import timedelta

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.email_service import EmailError, IEmailService
from tenantgram.app.services.tokens import new_opaque_token, password_reset_link
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.common import MessageResponse
from tenantgram.domain.base import utc_now
from tenantgram.domain.entities import PasswordResetToken

logger = logging.getLogger(__name__)

RESET_TOKEN_TTL = timedelta(minutes=30)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Unknown emails are reported as USER_NOT_FOUND
    - Generate a cryptographically secure token; only its SHA-256 hash is stored
    - Token expires in 30 minutes
    - Older tokens of the same user stay valid until they expire
    - A failed email is reported; the stored token is kept
    """

    def __init__(self, uow: UnitOfWork, email_service: IEmailService, server_name: str):
        self.uow = uow
        self.email_service = email_service
        self.server_name = server_name

    async def execute(self, email: str) -> Result[MessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with confirmation message, or Error
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "User not found."))

            raw_token, token_hash = new_opaque_token()
            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    user_id=user.id,
                    token_hash=token_hash,
                    expires_at=utc_now() + RESET_TOKEN_TTL,
                )
            )
            await self.uow.commit()
            recipient = user.email

        link = password_reset_link(self.server_name, raw_token)
        try:
            await self.email_service.send_email(
                recipient,
                "Password Reset Request",
                f"Click the link to reset your password (Expires in 30 minutes): \n {link}",
            )
        except EmailError as e:
            logger.error(f"Failed to send password reset email to {recipient}: {e}")
            return Return.err(Error("EMAIL_SEND_FAILED", "Failed to send email."))

        return Return.ok(MessageResponse(message="Password reset email sent."))
