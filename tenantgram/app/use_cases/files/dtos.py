"""
File Use Case DTOs (Data Transfer Objects)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from tenantgram.app.use_cases.common import CamelModel
from tenantgram.domain.entities import FileMetadata, FileStatus, FileType


# ============================================================================
# Command DTOs
# ============================================================================


class UploadFileCommand(BaseModel):
    data: bytes
    filename: Optional[str] = None


# ============================================================================
# Response DTOs
# ============================================================================


class FileMetadataResponse(CamelModel):
    id: str
    original_filename: Optional[str] = None
    stored_filename: str
    file_hash: str
    mime_type: str
    file_size: int
    uploaded_by: Optional[str] = None
    business_id: str
    upload_date: datetime
    file_type: FileType
    status: FileStatus
    public_access: bool

    @classmethod
    def from_metadata(cls, metadata: FileMetadata) -> "FileMetadataResponse":
        return cls.model_validate(metadata)


class FileContent(BaseModel):
    """Blob body plus the MIME type recorded at upload"""

    data: bytes
    mime_type: str
    stored_filename: str
