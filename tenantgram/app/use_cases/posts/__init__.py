"""
Post Use Cases

Tenant-scoped posts and likes.
"""

from .create_post_use_case import CreatePostUseCase
from .list_posts_use_case import ListPostsUseCase
from .update_post_use_case import UpdatePostUseCase
from .delete_post_use_case import DeletePostUseCase
from .toggle_like_use_case import ToggleLikeUseCase
from .dtos import CreatePostCommand, PostResponse, UpdatePostCommand

__all__ = [
    # Use Cases
    "CreatePostUseCase",
    "ListPostsUseCase",
    "UpdatePostUseCase",
    "DeletePostUseCase",
    "ToggleLikeUseCase",
    # DTOs
    "CreatePostCommand",
    "UpdatePostCommand",
    "PostResponse",
]
