from abc import ABC, abstractmethod
from typing import Optional

from tenantgram.domain.entities import EmailVerificationToken


class IEmailVerificationTokenRepository(ABC):
    """EmailVerificationToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: EmailVerificationToken) -> EmailVerificationToken:
        """Create a new verification token"""
        pass

    @abstractmethod
    async def get_by_token_hash(self, token_hash: str) -> Optional[EmailVerificationToken]:
        """Get verification token by token hash"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: str) -> Optional[EmailVerificationToken]:
        """Get the verification token issued to a user"""
        pass

    @abstractmethod
    async def delete(self, token: EmailVerificationToken) -> None:
        """Delete a verification token"""
        pass
