from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.app.repositories.user_repository import IUserRepository
from tenantgram.domain.base import canonical_email
from tenantgram.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == canonical_email(email))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def list_all(self) -> List[User]:
        stmt = select(User).order_by(User.creation_date_utc)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def list_by_business(self, business_id: str) -> List[User]:
        stmt = (
            select(User)
            .where(User.business_id == business_id)
            .order_by(User.creation_date_utc)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, user: User) -> User:
        """Create a new user"""
        user.email = canonical_email(user.email)
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
