from abc import ABC, abstractmethod


class EmailError(RuntimeError):
    pass


class IEmailService(ABC):
    """Outbound email transport"""

    @abstractmethod
    async def send_email(self, recipient: str, subject: str, body: str) -> None:
        """Send a plain-text email. Raises EmailError on failure."""
        pass
