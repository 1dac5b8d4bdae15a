"""
Post Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from tenantgram.app.use_cases.common import CamelModel
from tenantgram.domain.entities import Post


# ============================================================================
# Command DTOs
# ============================================================================


class CreatePostCommand(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    image: Optional[bytes] = None
    image_filename: Optional[str] = None


class UpdatePostCommand(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class PostResponse(CamelModel):
    """Post as returned to clients; is_liked reflects the calling user"""

    id: str
    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    creation_date_utc: datetime
    user_id: str
    likes: int
    business_id: str
    image_url: str
    is_liked: bool = False

    @classmethod
    def from_post(cls, post: Post, is_liked: bool = False) -> "PostResponse":
        return cls(
            id=post.id,
            title=post.title,
            description=post.description,
            location=post.location,
            creation_date_utc=post.creation_date_utc,
            user_id=post.user_id,
            likes=post.likes,
            business_id=post.business_id,
            image_url=post.image_url,
            is_liked=is_liked,
        )
