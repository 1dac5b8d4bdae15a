import pytest
from unittest.mock import AsyncMock, MagicMock

from tenantgram.app.services.file_storage import StorageError
from tenantgram.app.services.media import UnsupportedMediaType
from tenantgram.app.use_cases.files import (
    DeleteFileUseCase,
    GetFileMetadataUseCase,
    GetFileUseCase,
    GetPublicFileMetadataUseCase,
    GetPublicFileUseCase,
    ListFilesUseCase,
    UploadFileCommand,
    UploadFileUseCase,
)
from tenantgram.domain.entities import FileMetadata, FileStatus, UserRole


def make_metadata(**overrides):
    fields = dict(
        original_filename="photo.png",
        stored_filename="abc.png",
        file_hash="0" * 64,
        mime_type="image/png",
        file_size=3,
        uploaded_by="user-1",
        business_id="biz-1",
    )
    fields.update(overrides)
    return FileMetadata(**fields)


@pytest.fixture
def storage():
    storage = MagicMock()
    storage.read_bytes = AsyncMock(return_value=b"png")
    return storage


@pytest.fixture
def file_service():
    async def commit(uow, *stored):
        await uow.commit()

    service = MagicMock()
    service.commit = AsyncMock(side_effect=commit)
    service.discard = AsyncMock()
    service.store = AsyncMock(return_value=make_metadata())
    return service


# ============================================================================
# UploadFileUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_upload_commits_and_returns_metadata(mock_uow, file_service, make_principal):
    result = await UploadFileUseCase(mock_uow, file_service).execute(
        make_principal(), UploadFileCommand(data=b"png", filename="photo.png")
    )

    assert result.value.stored_filename == "abc.png"
    assert result.value.public_access is False
    mock_uow.commit.assert_called_once()
    file_service.commit.assert_awaited_once_with(mock_uow, file_service.store.return_value)


@pytest.mark.asyncio
async def test_generic_upload_passes_flag(mock_uow, file_service, make_principal):
    await UploadFileUseCase(mock_uow, file_service).execute(
        make_principal(), UploadFileCommand(data=b"doc"), require_image=False
    )

    assert file_service.store.call_args.kwargs["require_image"] is False


@pytest.mark.asyncio
async def test_upload_of_empty_file(mock_uow, file_service, make_principal):
    result = await UploadFileUseCase(mock_uow, file_service).execute(
        make_principal(), UploadFileCommand(data=b"")
    )

    assert result.error.code == "VALIDATION_ERROR"
    file_service.store.assert_not_called()


@pytest.mark.asyncio
async def test_upload_rejected_media(mock_uow, file_service, make_principal):
    file_service.store.side_effect = UnsupportedMediaType("gif")

    result = await UploadFileUseCase(mock_uow, file_service).execute(
        make_principal(), UploadFileCommand(data=b"GIF89a")
    )

    assert result.error.code == "UNSUPPORTED_MEDIA_TYPE"
    mock_uow.commit.assert_not_called()


# ============================================================================
# GetFileUseCase / GetPublicFileUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_get_file_in_own_business(mock_uow, storage, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata()

    result = await GetFileUseCase(mock_uow, storage).execute(make_principal(), "abc.png")

    assert result.value.data == b"png"
    assert result.value.mime_type == "image/png"
    storage.read_bytes.assert_called_once_with("abc.png")


@pytest.mark.asyncio
async def test_get_file_of_other_business(mock_uow, storage, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata(business_id="biz-2")

    result = await GetFileUseCase(mock_uow, storage).execute(make_principal(), "abc.png")

    assert result.error.code == "CROSS_TENANT_ACCESS"
    storage.read_bytes.assert_not_called()


@pytest.mark.asyncio
async def test_super_admin_has_no_file_bypass(mock_uow, storage, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata()

    result = await GetFileUseCase(mock_uow, storage).execute(
        make_principal(role=UserRole.SUPER_ADMIN, business_id=""), "abc.png"
    )

    assert result.error.code == "CROSS_TENANT_ACCESS"


@pytest.mark.asyncio
async def test_deleted_file_is_not_found(mock_uow, storage, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata(status=FileStatus.DELETED)

    result = await GetFileUseCase(mock_uow, storage).execute(make_principal(), "abc.png")

    assert result.error.code == "FILE_NOT_FOUND"


@pytest.mark.asyncio
async def test_missing_blob_is_not_found(mock_uow, storage, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata()
    storage.read_bytes.side_effect = StorageError("gone")

    result = await GetFileUseCase(mock_uow, storage).execute(make_principal(), "abc.png")

    assert result.error.code == "FILE_NOT_FOUND"


@pytest.mark.asyncio
async def test_public_file_served_without_caller(mock_uow, storage):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata(public_access=True)

    result = await GetPublicFileUseCase(mock_uow, storage).execute("abc.png")

    assert result.value.data == b"png"


@pytest.mark.asyncio
async def test_private_file_via_public_route(mock_uow, storage):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata()

    result = await GetPublicFileUseCase(mock_uow, storage).execute("abc.png")

    assert result.error.code == "ACCESS_DENIED"


@pytest.mark.asyncio
async def test_metadata_lookups(mock_uow, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata(public_access=True)

    private = await GetFileMetadataUseCase(mock_uow).execute(make_principal(), "abc.png")
    public = await GetPublicFileMetadataUseCase(mock_uow).execute("abc.png")

    assert private.value.file_hash == "0" * 64
    assert public.value.stored_filename == "abc.png"


@pytest.mark.asyncio
async def test_unknown_file_metadata(mock_uow, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = None

    result = await GetFileMetadataUseCase(mock_uow).execute(make_principal(), "nope")

    assert result.error.code == "FILE_NOT_FOUND"


# ============================================================================
# DeleteFileUseCase / ListFilesUseCase
# ============================================================================


@pytest.mark.asyncio
async def test_delete_marks_file_deleted(mock_uow, make_principal):
    metadata = make_metadata()
    mock_uow.files.get_by_stored_filename.return_value = metadata

    result = await DeleteFileUseCase(mock_uow).execute(make_principal(), "abc.png")

    assert result.is_ok()
    assert metadata.status == FileStatus.DELETED
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_delete_file_of_other_business(mock_uow, make_principal):
    mock_uow.files.get_by_stored_filename.return_value = make_metadata(business_id="biz-2")

    result = await DeleteFileUseCase(mock_uow).execute(make_principal(), "abc.png")

    assert result.error.code == "CROSS_TENANT_ACCESS"
    mock_uow.files.update.assert_not_called()


@pytest.mark.asyncio
async def test_list_active_files(mock_uow, make_principal):
    mock_uow.files.list_by_business_and_status.return_value = [make_metadata()]

    result = await ListFilesUseCase(mock_uow).execute(make_principal())

    assert len(result.value) == 1
    mock_uow.files.list_by_business_and_status.assert_called_once_with("biz-1", FileStatus.ACTIVE)


@pytest.mark.asyncio
async def test_list_files_without_business(mock_uow, make_principal):
    result = await ListFilesUseCase(mock_uow).execute(make_principal(business_id=""))

    assert result.value == []
