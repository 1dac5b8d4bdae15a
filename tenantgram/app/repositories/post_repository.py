from abc import ABC, abstractmethod
from typing import List, Optional

from tenantgram.domain.entities import Post


class IPostRepository(ABC):
    """Post repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, post_id: str) -> Optional[Post]:
        """Get post by ID"""
        pass

    @abstractmethod
    async def list_by_business(
        self, business_id: str, page: int, size: int
    ) -> List[Post]:
        """Page through a business's posts, newest first (page is 0-based)"""
        pass

    @abstractmethod
    async def create(self, post: Post) -> Post:
        """Create a new post"""
        pass

    @abstractmethod
    async def update(self, post: Post) -> Post:
        """Update existing post"""
        pass

    @abstractmethod
    async def delete(self, post: Post) -> None:
        """Delete a post"""
        pass

    @abstractmethod
    async def adjust_likes(self, post_id: str, delta: int) -> int:
        """Atomically add delta to the like counter, clamped at zero. Returns the new count."""
        pass
