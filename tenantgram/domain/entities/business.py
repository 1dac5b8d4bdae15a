"""
Business Entity

The tenant: organizational boundary for data isolation.
"""

from typing import Optional

from sqlmodel import Field, SQLModel

from tenantgram.domain.base import generate_uuid


class Business(SQLModel, table=True):
    """
    Business entity.

    Business Rules:
    - Soft delete only: a deleted business blocks every member request
      except those of SUPER_ADMIN
    - Logo and wallpaper reference stored filenames of tenant-private images
    """

    __tablename__ = "businesses"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    name: str = Field(index=True, max_length=255)
    admin_id: Optional[str] = Field(default=None, max_length=36)

    description: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    insta_link: Optional[str] = None
    fb_link: Optional[str] = None
    twitter_link: Optional[str] = None
    address: Optional[str] = None
    contact_info: Optional[str] = None
    brand_color_rgb: Optional[str] = None
    logo_image: Optional[str] = None
    wallpaper_image: Optional[str] = None

    deleted: bool = Field(default=False, index=True)
