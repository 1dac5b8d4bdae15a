"""
FileMetadata Entity

Describes one stored blob under the upload root.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from tenantgram.domain.base import generate_uuid, utc_now
from .enums import FileStatus, FileType


class FileMetadata(SQLModel, table=True):
    """
    FileMetadata entity.

    Business Rules:
    - stored_filename is server generated (uuid4 + extension) and globally unique
    - A row exists iff the blob was written under the upload root
    - file_hash is the SHA-256 of the bytes as uploaded (before transcode)
    - file_size is the size on disk (after transcode)
    - Soft delete flips status; the blob is retained
    - public_access files are served without authentication
    """

    __tablename__ = "files"

    id: str = Field(default_factory=generate_uuid, primary_key=True)
    original_filename: Optional[str] = Field(default=None, index=True)
    stored_filename: str = Field(unique=True, index=True)
    file_hash: str = Field(index=True, max_length=64)
    mime_type: str = Field(max_length=255)
    file_size: int = Field(default=0)
    uploaded_by: Optional[str] = Field(default=None, index=True, max_length=36)
    business_id: str = Field(default="", index=True, max_length=36)
    upload_date: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    file_type: FileType = Field(default=FileType.GENERIC, index=True)
    status: FileStatus = Field(default=FileStatus.ACTIVE)
    public_access: bool = Field(default=False)
