from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.app.repositories.business_repository import IBusinessRepository
from tenantgram.domain.entities import Business


class BusinessRepository(IBusinessRepository):
    """Business repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, business_id: str) -> Optional[Business]:
        """Get business by ID"""
        stmt = select(Business).where(Business.id == business_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_active(self) -> List[Business]:
        """List businesses that are not soft-deleted"""
        stmt = select(Business).where(Business.deleted == False).order_by(Business.name)  # noqa: E712
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, business: Business) -> Business:
        """Create a new business"""
        self.session.add(business)
        await self.session.flush()
        await self.session.refresh(business)
        return business

    async def update(self, business: Business) -> Business:
        """Update existing business"""
        self.session.add(business)
        await self.session.flush()
        await self.session.refresh(business)
        return business
