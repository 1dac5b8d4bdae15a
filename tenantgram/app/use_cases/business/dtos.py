"""
Business Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel, Field

from tenantgram.app.use_cases.common import CamelModel


# ============================================================================
# Command DTOs
# ============================================================================


class ImageUpload(BaseModel):
    data: bytes
    filename: Optional[str] = None


class BusinessCommand(BaseModel):
    """Create or partially update a business; None means not provided"""

    name: Optional[str] = None
    admin_id: Optional[str] = None
    description: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    insta_link: Optional[str] = None
    fb_link: Optional[str] = None
    twitter_link: Optional[str] = None
    address: Optional[str] = None
    contact_info: Optional[str] = None
    brand_color_rgb: Optional[str] = None
    deleted: Optional[str] = None
    logo_image: Optional[ImageUpload] = None
    wallpaper_image: Optional[ImageUpload] = None


# ============================================================================
# Response DTOs
# ============================================================================


class BusinessInfoResponse(CamelModel):
    """Public-facing business profile shown to members"""

    id: str
    name: str
    logo_image: Optional[str] = None
    description: Optional[str] = None
    wallpaper_image: Optional[str] = None
    website: Optional[str] = None
    email: Optional[str] = None
    insta_link: Optional[str] = None
    fb_link: Optional[str] = None
    twitter_link: Optional[str] = None
    address: Optional[str] = None
    contact_info: Optional[str] = None
    brand_color_rgb: Optional[str] = Field(default=None, alias="brandColorRGB")


class BusinessResponse(BusinessInfoResponse):
    """Full business record for administrators"""

    admin_id: Optional[str] = Field(default=None, alias="adminID")
    deleted: bool = False
