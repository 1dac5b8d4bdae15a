from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from tenantgram.api.error import raise_for_error
from tenantgram.api.utils.uploads import read_upload
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.business import (
    BusinessCommand,
    BusinessInfoResponse,
    BusinessResponse,
    CreateBusinessUseCase,
    DeleteBusinessUseCase,
    GetBusinessInfoUseCase,
    ImageUpload,
    ListBusinessesUseCase,
    UpdateBusinessUseCase,
)
from tenantgram.depends import get_config, get_file_service, get_principal, get_unit_of_work

router = APIRouter(prefix="/v1/business", tags=["Business"])


async def _image(upload: Optional[UploadFile], max_bytes: int) -> Optional[ImageUpload]:
    data = await read_upload(upload, max_bytes)
    if data is None:
        return None
    return ImageUpload(data=data, filename=upload.filename)


async def business_form(
    name: Optional[str] = Form(None),
    admin_id: Optional[str] = Form(None, alias="adminID"),
    description: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    insta_link: Optional[str] = Form(None, alias="instaLink"),
    fb_link: Optional[str] = Form(None, alias="fbLink"),
    twitter_link: Optional[str] = Form(None, alias="twitterLink"),
    address: Optional[str] = Form(None),
    contact_info: Optional[str] = Form(None, alias="contactInfo"),
    brand_color_rgb: Optional[str] = Form(None, alias="brandColorRGB"),
    deleted: Optional[str] = Form(None),
    logo_image: Optional[UploadFile] = File(None, alias="logoImage"),
    wallpaper_image: Optional[UploadFile] = File(None, alias="wallpaperImage"),
    config=Depends(get_config),
) -> BusinessCommand:
    """Multipart business fields shared by create and update"""
    return BusinessCommand(
        name=name,
        admin_id=admin_id,
        description=description,
        website=website,
        email=email,
        insta_link=insta_link,
        fb_link=fb_link,
        twitter_link=twitter_link,
        address=address,
        contact_info=contact_info,
        brand_color_rgb=brand_color_rgb,
        deleted=deleted.lower() if deleted else None,
        logo_image=await _image(logo_image, config.MAX_UPLOAD_BYTES),
        wallpaper_image=await _image(wallpaper_image, config.MAX_UPLOAD_BYTES),
    )


@router.post("", response_model=BusinessResponse)
@router.post("/", response_model=BusinessResponse, include_in_schema=False)
async def create_business(
    command: BusinessCommand = Depends(business_form),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    file_service: FileService = Depends(get_file_service),
):
    """
    Raises:
        - 400 Bad Request: Missing name or invalid image
        - 403 Forbidden: Caller is not SUPER_ADMIN
    """
    result = await CreateBusinessUseCase(uow, file_service).execute(caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.put("/{business_id}", response_model=BusinessResponse)
async def update_business(
    business_id: str,
    command: BusinessCommand = Depends(business_form),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    file_service: FileService = Depends(get_file_service),
):
    """
    Raises:
        - 403 Forbidden: ADMIN of another business, or a non super admin touching `deleted`
        - 404 Not Found: Business not found
    """
    result = await UpdateBusinessUseCase(uow, file_service).execute(
        caller, business_id, command
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", response_model=List[BusinessResponse])
@router.get("/", response_model=List[BusinessResponse], include_in_schema=False)
async def list_businesses(
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListBusinessesUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{business_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_business(
    business_id: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft delete; members of the business are locked out afterwards"""
    result = await DeleteBusinessUseCase(uow).execute(caller, business_id)
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{business_id}/info", response_model=BusinessInfoResponse)
async def get_business_info(
    business_id: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Raises:
        - 403 Forbidden: Business is not the caller's own
        - 404 Not Found: Business not found
    """
    result = await GetBusinessInfoUseCase(uow).execute(caller, business_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
