from typing import List

from fastapi import APIRouter, Depends, File, Response, UploadFile, status

from tenantgram.libs.result import Error
from tenantgram.api.error import raise_for_error
from tenantgram.api.utils.uploads import read_upload
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.file_storage import IFileStorage
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.files import (
    DeleteFileUseCase,
    FileContent,
    FileMetadataResponse,
    GetFileMetadataUseCase,
    GetFileUseCase,
    GetPublicFileMetadataUseCase,
    GetPublicFileUseCase,
    ListFilesUseCase,
    UploadFileCommand,
    UploadFileUseCase,
)
from tenantgram.depends import (
    get_config,
    get_file_service,
    get_file_storage,
    get_principal,
    get_unit_of_work,
)

router = APIRouter(prefix="/v1/files", tags=["Files"])


def _file_response(content: FileContent) -> Response:
    return Response(
        content=content.data,
        media_type=content.mime_type,
        headers={"Content-Disposition": f'inline; filename="{content.stored_filename}"'},
    )


async def _upload(
    file: UploadFile,
    require_image: bool,
    caller: Principal,
    uow: UnitOfWork,
    file_service: FileService,
    max_bytes: int,
) -> FileMetadataResponse:
    data = await read_upload(file, max_bytes)
    if data is None:
        raise_for_error(Error("VALIDATION_ERROR", "File is empty"))

    command = UploadFileCommand(data=data, filename=file.filename)
    result = await UploadFileUseCase(uow, file_service).execute(
        caller, command, require_image=require_image
    )
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.post("/upload/image", response_model=FileMetadataResponse)
async def upload_image(
    file: UploadFile = File(...),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    file_service: FileService = Depends(get_file_service),
    config=Depends(get_config),
):
    """
    Store a JPEG, PNG or WebP image for the caller's business

    Raises:
        - 400 Bad Request: Not a supported image
        - 413 Payload Too Large: Over the upload limit
    """
    return await _upload(file, True, caller, uow, file_service, config.MAX_UPLOAD_BYTES)


@router.post("/upload", response_model=FileMetadataResponse)
async def upload_file(
    file: UploadFile = File(...),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    file_service: FileService = Depends(get_file_service),
    config=Depends(get_config),
):
    """Store any file; images are still validated and transcoded"""
    return await _upload(file, False, caller, uow, file_service, config.MAX_UPLOAD_BYTES)


@router.get("", response_model=List[FileMetadataResponse])
@router.get("/", response_model=List[FileMetadataResponse], include_in_schema=False)
async def list_files(
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await ListFilesUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


# Public routes are declared before /{stored_filename} so "public" is never
# taken for a file name.


@router.get("/public/{stored_filename}")
async def get_public_file(
    stored_filename: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Raises:
        - 403 Forbidden: File is not public
        - 404 Not Found: Unknown or deleted file
    """
    result = await GetPublicFileUseCase(uow, storage).execute(stored_filename)
    if result.is_err():
        raise_for_error(result.error)
    return _file_response(result.value)


@router.get("/public/{stored_filename}/metadata", response_model=FileMetadataResponse)
async def get_public_file_metadata(
    stored_filename: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetPublicFileMetadataUseCase(uow).execute(stored_filename)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/{stored_filename}")
async def get_file(
    stored_filename: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    storage: IFileStorage = Depends(get_file_storage),
):
    """
    Serve a tenant-private file with its sniffed MIME type

    Raises:
        - 403 Forbidden: File belongs to another business
        - 404 Not Found: Unknown or deleted file
    """
    result = await GetFileUseCase(uow, storage).execute(caller, stored_filename)
    if result.is_err():
        raise_for_error(result.error)
    return _file_response(result.value)


@router.get("/{stored_filename}/metadata", response_model=FileMetadataResponse)
async def get_file_metadata(
    stored_filename: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    result = await GetFileMetadataUseCase(uow).execute(caller, stored_filename)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.delete("/{stored_filename}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    stored_filename: str,
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Soft delete within the caller's business; the blob is kept"""
    result = await DeleteFileUseCase(uow).execute(caller, stored_filename)
    if result.is_err():
        raise_for_error(result.error)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
