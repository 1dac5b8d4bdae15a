"""
Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

from .enums import (
    AuthProvider,
    FileStatus,
    FileType,
    ProfileStatus,
    UserRole,
)

from .user import User
from .business import Business
from .post import Post
from .like import Like
from .file_metadata import FileMetadata
from .password_reset_token import PasswordResetToken
from .email_verification_token import EmailVerificationToken

__all__ = [
    # Enums
    "AuthProvider",
    "FileStatus",
    "FileType",
    "ProfileStatus",
    "UserRole",
    # Entities
    "User",
    "Business",
    "Post",
    "Like",
    "FileMetadata",
    "PasswordResetToken",
    "EmailVerificationToken",
]
