from abc import ABC, abstractmethod
from typing import List, Optional

from tenantgram.domain.entities import Business


class IBusinessRepository(ABC):
    """Business repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, business_id: str) -> Optional[Business]:
        """Get business by ID"""
        pass

    @abstractmethod
    async def list_active(self) -> List[Business]:
        """List businesses that are not soft-deleted"""
        pass

    @abstractmethod
    async def create(self, business: Business) -> Business:
        """Create a new business"""
        pass

    @abstractmethod
    async def update(self, business: Business) -> Business:
        """Update existing business"""
        pass
