"""
Business Use Cases

Tenant management and the member-facing business profile.
"""

from .create_business_use_case import CreateBusinessUseCase
from .update_business_use_case import UpdateBusinessUseCase
from .list_businesses_use_case import ListBusinessesUseCase
from .delete_business_use_case import DeleteBusinessUseCase
from .get_business_info_use_case import GetBusinessInfoUseCase
from .dtos import BusinessCommand, BusinessInfoResponse, BusinessResponse, ImageUpload

__all__ = [
    # Use Cases
    "CreateBusinessUseCase",
    "UpdateBusinessUseCase",
    "ListBusinessesUseCase",
    "DeleteBusinessUseCase",
    "GetBusinessInfoUseCase",
    # DTOs
    "BusinessCommand",
    "BusinessInfoResponse",
    "BusinessResponse",
    "ImageUpload",
]
