from abc import ABC, abstractmethod
from typing import List, Optional

from tenantgram.domain.entities import Like


class ILikeRepository(ABC):
    """Like repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_post(self, user_id: str, post_id: str) -> Optional[Like]:
        """Get the like row of a user for a post"""
        pass

    @abstractmethod
    async def get_by_user_and_posts(self, user_id: str, post_ids: List[str]) -> List[Like]:
        """Get a user's like rows for several posts"""
        pass

    @abstractmethod
    async def create(self, like: Like) -> Like:
        """Create a new like"""
        pass

    @abstractmethod
    async def update(self, like: Like) -> Like:
        """Update existing like"""
        pass

    @abstractmethod
    async def delete_by_post(self, post_id: str) -> None:
        """Delete every like of a post"""
        pass
