"""
Branding helpers shared by the business create and update use cases.
"""

from typing import List, Optional, Tuple

from tenantgram.libs.result import Error
from tenantgram.app.services.authorization import Principal, is_super_admin
from tenantgram.app.services.file_service import FileService, upload_error
from tenantgram.app.services.file_storage import StorageError
from tenantgram.app.services.media import MediaError
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.domain.entities import Business, FileMetadata
from .dtos import BusinessCommand, ImageUpload


BRANDING_FIELDS = (
    "name",
    "admin_id",
    "description",
    "website",
    "email",
    "insta_link",
    "fb_link",
    "twitter_link",
    "address",
    "contact_info",
    "brand_color_rgb",
)


def super_admin_only(caller: Principal) -> Optional[Error]:
    if not is_super_admin(caller):
        return Error("INSUFFICIENT_ROLE", "Only super admins can manage businesses")
    return None


async def _store_branding_image(
    uow: UnitOfWork,
    file_service: FileService,
    upload: ImageUpload,
    business_id: str,
    user_id: Optional[str],
) -> FileMetadata:
    return await file_service.store(
        uow,
        upload.data,
        upload.filename,
        business_id=business_id,
        user_id=user_id,
        require_image=True,
    )


async def apply_images(
    uow: UnitOfWork,
    file_service: FileService,
    business: Business,
    command: BusinessCommand,
    user_id: Optional[str],
) -> Tuple[List[FileMetadata], Optional[Error]]:
    """Store the logo and wallpaper; returns what was stored so the caller can commit it"""
    stored = []
    try:
        if command.logo_image is not None:
            logo = await _store_branding_image(
                uow, file_service, command.logo_image, business.id, user_id
            )
            stored.append(logo)
            business.logo_image = logo.stored_filename
        if command.wallpaper_image is not None:
            wallpaper = await _store_branding_image(
                uow, file_service, command.wallpaper_image, business.id, user_id
            )
            stored.append(wallpaper)
            business.wallpaper_image = wallpaper.stored_filename
    except (MediaError, StorageError) as e:
        await file_service.discard(*stored)
        return [], upload_error(e)
    return stored, None


def apply_fields(business: Business, command: BusinessCommand) -> None:
    for field in BRANDING_FIELDS:
        value = getattr(command, field)
        if value is not None:
            setattr(business, field, value)
