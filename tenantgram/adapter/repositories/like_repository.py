from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.app.repositories.like_repository import ILikeRepository
from tenantgram.domain.entities import Like


class LikeRepository(ILikeRepository):
    """Like repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_post(self, user_id: str, post_id: str) -> Optional[Like]:
        stmt = select(Like).where(Like.user_id == user_id, Like.post_id == post_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_and_posts(self, user_id: str, post_ids: List[str]) -> List[Like]:
        if not post_ids:
            return []
        stmt = select(Like).where(Like.user_id == user_id, col(Like.post_id).in_(post_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, like: Like) -> Like:
        """Create a new like"""
        self.session.add(like)
        await self.session.flush()
        await self.session.refresh(like)
        return like

    async def update(self, like: Like) -> Like:
        """Update existing like"""
        self.session.add(like)
        await self.session.flush()
        await self.session.refresh(like)
        return like

    async def delete_by_post(self, post_id: str) -> None:
        await self.session.exec(delete(Like).where(Like.post_id == post_id))
        await self.session.flush()
