"""
EmailVerificationToken Entity
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, SQLModel

from tenantgram.domain.base import generate_uuid, utc_now


class EmailVerificationToken(SQLModel, table=True):
    """
    EmailVerificationToken entity.

    Business Rules:
    - Expires 24 hours after issuance
    - Re-issuing deletes the previous token of the same user first
    - Deleted once the email is verified
    """

    __tablename__ = "email_verification_tokens"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    user_id: str = Field(index=True, max_length=36)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    def is_expired(self) -> bool:
        return self.expires_at < utc_now()
