from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Response, UploadFile, status
from pydantic import BaseModel

from tenantgram.api.error import raise_for_error
from tenantgram.api.utils.uploads import read_upload
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.posts import (
    CreatePostCommand,
    CreatePostUseCase,
    DeletePostUseCase,
    ListPostsUseCase,
    PostResponse,
    ToggleLikeUseCase,
    UpdatePostCommand,
    UpdatePostUseCase,
)
from tenantgram.app.use_cases.posts.list_posts_use_case import DEFAULT_PAGE_SIZE
from tenantgram.depends import get_config, get_file_service, get_principal, get_unit_of_work

router = APIRouter(prefix="/v1/posts", tags=["Posts"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=PostResponse)
@router.post(
    "/", status_code=status.HTTP_201_CREATED, response_model=PostResponse, include_in_schema=False
)
async def create_post(
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    file_service: FileService = Depends(get_file_service),
    config=Depends(get_config),
):
    """
    Create a post in the caller's business with an attached image

    Raises:
        - 400 Bad Request: Missing title or image, field too long, unsupported image
        - 403 Forbidden: Caller is not a DEFAULT member of a business
        - 413 Payload Too Large: Image over the upload limit
    """
    command = CreatePostCommand(
        title=title,
        description=description,
        location=location,
        image=await read_upload(file, config.MAX_UPLOAD_BYTES),
        image_filename=file.filename if file else None,
    )

    result = await CreatePostUseCase(uow, file_service).execute(caller, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("", response_model=List[PostResponse])
@router.get("/", response_model=List[PostResponse], include_in_schema=False)
async def list_posts(
    page: int = Query(0),
    size: int = Query(DEFAULT_PAGE_SIZE),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Newest first; `page` counts from 1 and `size` is capped at 100"""
    result = await ListPostsUseCase(uow).execute(caller, page, size)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


class UpdatePostRequest(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    request: UpdatePostRequest,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Raises:
        - 400 Bad Request: Invalid fields
        - 403 Forbidden: Not an ADMIN, not the author, or another business's post
        - 404 Not Found: Post not found
    """
    command = UpdatePostCommand(
        title=request.title, description=request.description, location=request.location
    )
    result = await UpdatePostUseCase(uow).execute(caller, post_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await DeletePostUseCase(uow).execute(caller, post_id)
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{post_id}/like", response_model=bool)
async def toggle_like(
    post_id: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Returns the new liked state"""
    result = await ToggleLikeUseCase(uow).execute(caller, post_id)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
