"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional

from pydantic import BaseModel

from tenantgram.app.use_cases.users.dtos import UserResponse


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Command to register an email/password account"""

    first_name: str
    last_name: str
    email: str
    password: str


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for registration use case"""

    message: str
    user: Optional[UserResponse] = None
    token: Optional[str] = None


class LoginResponse(BaseModel):
    """Response for login and current-user use cases"""

    message: str
    user: Optional[UserResponse] = None
    token: Optional[str] = None
