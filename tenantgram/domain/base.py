import uuid
from datetime import UTC, datetime


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utc_now() -> datetime:
    """Naive UTC timestamp, the form SQLite round-trips unchanged."""
    return datetime.now(UTC).replace(tzinfo=None)


def canonical_email(email: str) -> str:
    return email.strip().lower()
