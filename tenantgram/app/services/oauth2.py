from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


class OAuth2Error(RuntimeError):
    pass


@dataclass(frozen=True)
class OAuth2Profile:
    """Principal attributes resolved from a provider callback"""

    provider: str
    email: str
    name: Optional[str] = None
    picture: Optional[str] = None


class IOAuth2Client(ABC):
    """Authorization-code exchange with external identity providers"""

    @abstractmethod
    def is_supported(self, provider: str) -> bool:
        pass

    @abstractmethod
    def authorization_url(self, provider: str, state: str) -> str:
        """Provider consent page URL carrying our state parameter"""
        pass

    @abstractmethod
    async def fetch_profile(self, provider: str, code: str) -> OAuth2Profile:
        """Exchange an authorization code for the user's profile. Raises OAuth2Error."""
        pass
