"""
Reset Password Use Case

Validates a reset token from the emailed form and replaces the password.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.app.services.passwords import hash_password, validate_password
from tenantgram.app.services.tokens import hash_token
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.common import MessageResponse


class ResetPasswordUseCase:
    """
    Use case for submitting the password reset form.

    Business Rules (checked in this order):
    - password and confirm_password must match
    - New password must satisfy the strength policy
    - Token must exist and not be expired
    - Token owner must exist
    - On success the password hash is replaced and the token deleted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, token: str, password: str, confirm_password: str
    ) -> Result[MessageResponse]:
        """
        Execute reset password use case.

        Args:
            token: Raw token from the email link
            password: New password
            confirm_password: Repeated new password

        Returns:
            Result with success message, or Error whose message is shown to the user
        """
        if password != confirm_password:
            return Return.err(Error("PASSWORD_MISMATCH", "Passwords do not match."))

        password_error = validate_password(password)
        if password_error:
            return Return.err(Error("INVALID_PASSWORD", password_error))

        async with self.uow:
            reset_token = await self.uow.password_reset_tokens.get_by_token_hash(
                hash_token(token)
            )
            if reset_token is None:
                return Return.err(Error("INVALID_TOKEN", "Invalid token."))

            if reset_token.is_expired():
                return Return.err(Error("TOKEN_EXPIRED", "Token expired."))

            user = await self.uow.users.get_by_id(reset_token.user_id)
            if user is None:
                return Return.err(Error("USER_NOT_FOUND", "Error processing request."))

            user.password_hash = hash_password(password)
            await self.uow.users.update(user)
            await self.uow.password_reset_tokens.delete(reset_token)
            await self.uow.commit()

        return Return.ok(MessageResponse(message="Password has been reset successfully!"))
