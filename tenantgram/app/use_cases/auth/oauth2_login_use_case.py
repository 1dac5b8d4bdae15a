"""
OAuth2 Login Use Case

Bridges a resolved provider principal to a local account and bearer token.
"""

from tenantgram.libs.result import Error, Result, Return
from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.oauth2 import OAuth2Profile
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.base import canonical_email
from tenantgram.domain.entities import AuthProvider, User, UserRole


class OAuth2LoginUseCase:
    """
    Use case for the OAuth2 success bridge.

    Business Rules:
    - Existing account found by email is reused whatever its provider
    - New accounts: first name from the provider's display name, role PENDING,
      provider from the registration id, email already verified
    - Legacy accounts with no role are moved to PENDING
    - Returns our own bearer token
    """

    def __init__(self, uow: UnitOfWork, jwt_service: JwtService):
        self.uow = uow
        self.jwt_service = jwt_service

    async def execute(self, profile: OAuth2Profile) -> Result[str]:
        try:
            provider = AuthProvider(profile.provider.upper())
        except ValueError:
            return Return.err(
                Error("UNSUPPORTED_PROVIDER", f"Unsupported provider: {profile.provider}")
            )

        email = canonical_email(profile.email)

        async with self.uow:
            user = await self.uow.users.get_by_email(email)

            if user is None:
                user = User(
                    email=email,
                    first_name=profile.name,
                    provider=provider,
                    role=UserRole.PENDING,
                    email_verified=True,
                )
                user = await self.uow.users.create(user)
            elif user.role is None:
                user.role = UserRole.PENDING
                user = await self.uow.users.update(user)

            await self.uow.commit()
            token = self.jwt_service.issue(user)

        return Return.ok(token)
