"""
File Use Cases

Upload, retrieval and soft delete of stored blobs.
"""

from .upload_file_use_case import UploadFileUseCase
from .get_file_use_case import (
    GetFileMetadataUseCase,
    GetFileUseCase,
    GetPublicFileMetadataUseCase,
    GetPublicFileUseCase,
)
from .delete_file_use_case import DeleteFileUseCase
from .list_files_use_case import ListFilesUseCase
from .dtos import FileContent, FileMetadataResponse, UploadFileCommand

__all__ = [
    # Use Cases
    "UploadFileUseCase",
    "GetFileUseCase",
    "GetPublicFileUseCase",
    "GetFileMetadataUseCase",
    "GetPublicFileMetadataUseCase",
    "DeleteFileUseCase",
    "ListFilesUseCase",
    # DTOs
    "UploadFileCommand",
    "FileMetadataResponse",
    "FileContent",
]
