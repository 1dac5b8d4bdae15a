"""
User Entity

A person bound to at most one business (tenant).
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantgram.domain.base import generate_uuid, utc_now
from .enums import AuthProvider, ProfileStatus, UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email is unique and stored in canonical (lower-case) form
    - password_hash is absent for federated (OAuth2) accounts and never serialized
    - business_id is an empty string until the user is invited to a business
    - role starts at PENDING; SUPER_ADMIN is never assignable through the API
    - Users are never deleted, only deactivated through profile_status
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    first_name: Optional[str] = Field(default=None, max_length=255)
    last_name: Optional[str] = Field(default=None, max_length=255)
    password_hash: Optional[str] = Field(default=None, max_length=60)

    role: Optional[UserRole] = Field(default=UserRole.PENDING)
    business_id: str = Field(default="", index=True, max_length=36)
    profile_status: ProfileStatus = Field(default=ProfileStatus.ACTIVE)
    email_verified: bool = Field(default=False)
    provider: AuthProvider = Field(default=AuthProvider.EMAIL)

    profile_picture: str = Field(default="")
    phone_number: Optional[str] = Field(default=None, max_length=50)
    notifications: str = Field(default="true")

    creation_date_utc: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )

    __table_args__ = (Index("idx_user_role", "role"),)
