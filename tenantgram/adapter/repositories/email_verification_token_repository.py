from typing import Optional

from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from tenantgram.domain.entities import EmailVerificationToken


class EmailVerificationTokenRepository(IEmailVerificationTokenRepository):
    """EmailVerificationToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: EmailVerificationToken) -> EmailVerificationToken:
        """Create a new email verification token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(self, token_hash: str) -> Optional[EmailVerificationToken]:
        """Get email verification token by token hash"""
        stmt = select(EmailVerificationToken).where(
            EmailVerificationToken.token_hash == token_hash
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(self, user_id: str) -> Optional[EmailVerificationToken]:
        """Most recent verification token of a user"""
        stmt = (
            select(EmailVerificationToken)
            .where(EmailVerificationToken.user_id == user_id)
            .order_by(col(EmailVerificationToken.created_at).desc())
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def delete(self, token: EmailVerificationToken) -> None:
        """Delete a verification token"""
        await self.session.delete(token)
        await self.session.flush()
