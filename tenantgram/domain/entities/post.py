"""
Post Entity

Image-bearing content scoped to one business.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from tenantgram.domain.base import generate_uuid, utc_now

TITLE_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000
LOCATION_MAX_LENGTH = 255


class Post(SQLModel, table=True):
    """
    Post entity.

    Business Rules:
    - Belongs to exactly one business; every query filters by business_id
    - likes is the running count of Like rows with liked=True, never below 0
    """

    __tablename__ = "posts"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    title: str = Field(index=True, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    location: Optional[str] = Field(default=None, max_length=LOCATION_MAX_LENGTH)

    creation_date_utc: datetime = Field(
        default_factory=utc_now, sa_column=Column(DateTime)
    )
    user_id: str = Field(index=True, max_length=36)
    business_id: str = Field(index=True, max_length=36)
    image_url: str = Field(default="")
    likes: int = Field(default=0)

    __table_args__ = (
        Index("idx_post_business_created", "business_id", "creation_date_utc"),
    )
