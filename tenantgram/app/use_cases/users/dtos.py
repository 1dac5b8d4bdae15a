"""
User Use Case DTOs (Data Transfer Objects)

Command and Response classes for the user domain.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from tenantgram.app.use_cases.common import CamelModel
from tenantgram.domain.entities import AuthProvider, ProfileStatus, User, UserRole


# ============================================================================
# Command DTOs
# ============================================================================


class UpdateUserCommand(BaseModel):
    """
    Partial update of a user. Fields left as None are not touched.

    email is accepted but ignored until email changes go through verification.
    """

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    notifications: Optional[str] = None
    phone_number: Optional[str] = None
    password: Optional[str] = None
    current_password: Optional[str] = None
    business_id: Optional[str] = None
    role: Optional[UserRole] = None
    profile_status: Optional[ProfileStatus] = None
    profile_picture: Optional[bytes] = None
    profile_picture_filename: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class UserResponse(CamelModel):
    """User as returned to clients; never carries the password hash"""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: str
    role: Optional[UserRole] = None
    business_id: str = Field(default="", alias="businessID")
    phone_number: Optional[str] = None
    profile_status: ProfileStatus
    email_verified: bool
    profile_picture: str = ""
    provider: AuthProvider
    notifications: str
    creation_date_utc: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls.model_validate(user)
