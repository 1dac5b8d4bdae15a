"""
Register Use Case

Creates an email/password account and sends the email verification link.
"""

import logging
from datetime import timedelta

from tenantgram.libs.result import Error, Result, Return
from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.email_service import EmailError, IEmailService
from tenantgram.app.services.passwords import hash_password, validate_password
from tenantgram.app.services.tokens import new_opaque_token, verification_link
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.base import canonical_email, utc_now
from tenantgram.domain.entities import (
    AuthProvider,
    EmailVerificationToken,
    User,
    UserRole,
)
from tenantgram.app.use_cases.users.dtos import UserResponse
from .dtos import RegisterCommand, RegisterResponse

logger = logging.getLogger(__name__)

VERIFICATION_TOKEN_TTL = timedelta(hours=24)


class RegisterUseCase:
    """
    Use case for user registration.

    Business Rules:
    - Email must be unique (case-insensitive)
    - Password must satisfy the strength policy
    - New users start as PENDING with provider EMAIL and an unverified email
    - A bearer token is issued immediately; login does not require verification
    - A 24 h verification token is stored hashed and its link emailed
    - A failed verification email does not fail the registration
    """

    def __init__(
        self,
        uow: UnitOfWork,
        jwt_service: JwtService,
        email_service: IEmailService,
        server_name: str,
    ):
        self.uow = uow
        self.jwt_service = jwt_service
        self.email_service = email_service
        self.server_name = server_name

    async def execute(self, command: RegisterCommand) -> Result[RegisterResponse]:
        """
        Execute registration use case.

        Args:
            command: RegisterCommand with names, email and password

        Returns:
            Result with RegisterResponse (token and user), or Error
        """
        email = canonical_email(command.email)

        async with self.uow:
            if await self.uow.users.exists_by_email(email):
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "Email is already registered")
                )

            password_error = validate_password(command.password)
            if password_error:
                return Return.err(Error("INVALID_PASSWORD", password_error))

            user = User(
                first_name=command.first_name,
                last_name=command.last_name,
                email=email,
                password_hash=hash_password(command.password),
                role=UserRole.PENDING,
                provider=AuthProvider.EMAIL,
                email_verified=False,
            )
            user = await self.uow.users.create(user)

            raw_token, token_hash = new_opaque_token()
            await self.uow.email_verification_tokens.create(
                EmailVerificationToken(
                    user_id=user.id,
                    token_hash=token_hash,
                    expires_at=utc_now() + VERIFICATION_TOKEN_TTL,
                )
            )

            await self.uow.commit()

            token = self.jwt_service.issue(user)
            response = RegisterResponse(
                message="User registered successfully. Please check your email for verification link.",
                user=UserResponse.from_user(user),
                token=token,
            )

        link = verification_link(self.server_name, raw_token)
        try:
            await self.email_service.send_email(
                email,
                "Email Verification",
                "Welcome to Tenantgram! Please verify your email by clicking the "
                f"following link (expires in 24 hours):\n{link}",
            )
        except EmailError as e:
            logger.warning(f"Failed to send verification email to {email}: {e}")

        return Return.ok(response)
