"""
User Use Cases

User listing, profile updates and invitations.
"""

from .list_users_use_case import ListUsersUseCase
from .update_user_use_case import UpdateUserUseCase
from .invite_user_use_case import InviteUserUseCase
from .dtos import UpdateUserCommand, UserResponse

__all__ = [
    "ListUsersUseCase",
    "UpdateUserUseCase",
    "InviteUserUseCase",
    "UpdateUserCommand",
    "UserResponse",
]
