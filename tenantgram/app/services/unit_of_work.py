from abc import ABC, abstractmethod

from tenantgram.app.repositories.business_repository import IBusinessRepository
from tenantgram.app.repositories.email_verification_token_repository import (
    IEmailVerificationTokenRepository,
)
from tenantgram.app.repositories.file_metadata_repository import IFileMetadataRepository
from tenantgram.app.repositories.like_repository import ILikeRepository
from tenantgram.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from tenantgram.app.repositories.post_repository import IPostRepository
from tenantgram.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    businesses: IBusinessRepository
    posts: IPostRepository
    likes: ILikeRepository
    files: IFileMetadataRepository
    password_reset_tokens: IPasswordResetTokenRepository
    email_verification_tokens: IEmailVerificationTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
