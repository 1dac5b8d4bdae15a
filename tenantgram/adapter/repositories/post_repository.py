from typing import List, Optional

from sqlalchemy import case, update
from sqlmodel import col, select
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.app.repositories.post_repository import IPostRepository
from tenantgram.domain.entities import Post


class PostRepository(IPostRepository):
    """Post repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, post_id: str) -> Optional[Post]:
        """Get post by ID"""
        stmt = select(Post).where(Post.id == post_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_business(
        self, business_id: str, page: int, size: int
    ) -> List[Post]:
        """Page through a business's posts, newest first"""
        stmt = (
            select(Post)
            .where(Post.business_id == business_id)
            .order_by(col(Post.creation_date_utc).desc(), col(Post.id))
            .offset(page * size)
            .limit(size)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, post: Post) -> Post:
        """Create a new post"""
        self.session.add(post)
        await self.session.flush()
        await self.session.refresh(post)
        return post

    async def update(self, post: Post) -> Post:
        """Update existing post"""
        self.session.add(post)
        await self.session.flush()
        await self.session.refresh(post)
        return post

    async def delete(self, post: Post) -> None:
        """Delete a post"""
        await self.session.delete(post)
        await self.session.flush()

    async def adjust_likes(self, post_id: str, delta: int) -> int:
        """Single UPDATE statement so concurrent toggles cannot lose increments"""
        new_value = Post.likes + delta
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(likes=case((new_value < 0, 0), else_=new_value))
            .execution_options(synchronize_session=False)
        )
        await self.session.exec(stmt)
        await self.session.flush()

        post = await self.get_by_id(post_id)
        if post is None:
            return 0
        await self.session.refresh(post)
        return post.likes
