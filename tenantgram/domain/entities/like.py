"""
Like Entity

At most one row per (user, post); liked flips on each toggle.
"""

from sqlmodel import Field, Index, SQLModel

from tenantgram.domain.base import generate_uuid


class Like(SQLModel, table=True):
    __tablename__ = "likes"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    user_id: str = Field(index=True, max_length=36)
    post_id: str = Field(index=True, max_length=36)
    liked: bool = Field(default=True)

    __table_args__ = (
        Index("idx_like_user_post", "user_id", "post_id", unique=True),
    )
