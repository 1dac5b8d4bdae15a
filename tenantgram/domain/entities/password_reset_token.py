"""
PasswordResetToken Entity

Single-use password reset tokens.
"""

from datetime import datetime

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantgram.domain.base import generate_uuid, utc_now


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity.

    Business Rules:
    - Expires 30 minutes after issuance
    - Only the SHA-256 hash of the emailed token is stored
    - Deleted on successful reset
    """

    __tablename__ = "password_reset_tokens"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    user_id: str = Field(index=True, max_length=36)
    token_hash: str = Field(unique=True, index=True, max_length=64)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_password_reset_expires_at", "expires_at"),)

    def is_expired(self) -> bool:
        return self.expires_at < utc_now()
