from abc import ABC, abstractmethod
from typing import List, Optional

from tenantgram.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by canonical email address"""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether an email is already registered"""
        pass

    @abstractmethod
    async def list_all(self) -> List[User]:
        """List every user"""
        pass

    @abstractmethod
    async def list_by_business(self, business_id: str) -> List[User]:
        """List users bound to a business"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
