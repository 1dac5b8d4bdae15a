from typing import Optional

from fastapi import UploadFile, status

from tenantgram.libs.result import Error
from tenantgram.api.error import ClientError


async def read_upload(upload: Optional[UploadFile], max_bytes: int) -> Optional[bytes]:
    """
    Read a multipart file part whole.

    Returns None when the part is absent or empty.

    Raises:
        ClientError: 413 when the part is larger than max_bytes
    """
    if upload is None:
        return None
    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise ClientError(
            Error("FILE_TOO_LARGE", f"File exceeds the {max_bytes} byte upload limit"),
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        )
    return data or None
