"""
Domain Enums

Closed enumerations used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Platform-wide role of a user"""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    DEFAULT = "DEFAULT"
    PENDING = "PENDING"


class ProfileStatus(str, Enum):
    """User profile lifecycle"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"


class AuthProvider(str, Enum):
    """How the account authenticates"""

    EMAIL = "EMAIL"
    GOOGLE = "GOOGLE"
    APPLE = "APPLE"


class FileType(str, Enum):
    GENERIC = "GENERIC"
    IMAGE = "IMAGE"


class FileStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DELETED = "DELETED"
