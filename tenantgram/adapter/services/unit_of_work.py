from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.adapter.repositories.business_repository import BusinessRepository
from tenantgram.adapter.repositories.email_verification_token_repository import (
    EmailVerificationTokenRepository,
)
from tenantgram.adapter.repositories.file_metadata_repository import FileMetadataRepository
from tenantgram.adapter.repositories.like_repository import LikeRepository
from tenantgram.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from tenantgram.adapter.repositories.post_repository import PostRepository
from tenantgram.adapter.repositories.user_repository import UserRepository
from tenantgram.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.businesses = BusinessRepository(self.session)
        self.posts = PostRepository(self.session)
        self.likes = LikeRepository(self.session)
        self.files = FileMetadataRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.email_verification_tokens = EmailVerificationTokenRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
