from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import PlainTextResponse
from pydantic import EmailStr

from tenantgram.libs.result import Error
from tenantgram.api.error import ClientError, raise_for_error
from tenantgram.api.utils.uploads import read_upload
from tenantgram.app.services.authorization import Principal, is_super_admin
from tenantgram.app.services.email_service import IEmailService
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.users import (
    InviteUserUseCase,
    ListUsersUseCase,
    UpdateUserCommand,
    UpdateUserUseCase,
    UserResponse,
)
from tenantgram.depends import (
    get_config,
    get_email_service,
    get_file_service,
    get_principal,
    get_unit_of_work,
)
from tenantgram.domain.entities import ProfileStatus, UserRole

router = APIRouter(prefix="/v1/users", tags=["User"])


@router.get("", response_model=List[UserResponse])
@router.get("/", response_model=List[UserResponse], include_in_schema=False)
async def list_users(
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    SUPER_ADMIN sees every user, ADMIN the members of their business

    Raises:
        - 403 Forbidden: Caller is not an administrator
    """
    result = await ListUsersUseCase(uow).execute(caller)
    if result.is_err():
        raise_for_error(result.error)
    return result.value


@router.get("/invite", response_class=PlainTextResponse)
async def invite_user(
    email: EmailStr = Query(...),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_service: IEmailService = Depends(get_email_service),
):
    """
    Bind an existing, unassigned user to the caller's business and email them

    Raises:
        - 400 Bad Request: User already belongs to a business
        - 403 Forbidden: Caller is not an ADMIN
        - 404 Not Found: No user with this email
        - 500 Internal Server Error: Invitation email could not be sent
    """
    result = await InviteUserUseCase(uow, email_service).execute(caller, email)
    if result.is_err():
        raise_for_error(result.error)
    return PlainTextResponse(result.value.message)


def _parse_role(value: Optional[str]) -> Optional[UserRole]:
    if not value:
        return None
    try:
        return UserRole(value.upper())
    except ValueError:
        raise ClientError(Error("INVALID_ROLE", f"Unknown role: {value}"))


def _parse_profile_status(value: Optional[str]) -> Optional[ProfileStatus]:
    if not value:
        return None
    try:
        return ProfileStatus(value.upper())
    except ValueError:
        raise ClientError(Error("VALIDATION_ERROR", f"Unknown profile status: {value}"))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    request: Request,
    first_name: Optional[str] = Form(None, alias="firstName"),
    last_name: Optional[str] = Form(None, alias="lastName"),
    email: Optional[str] = Form(None),
    notifications: Optional[str] = Form(None),
    phone_number: Optional[str] = Form(None, alias="phoneNumber"),
    password: Optional[str] = Form(None),
    current_password: Optional[str] = Form(None, alias="currentPassword"),
    business_id: Optional[str] = Form(None, alias="businessID"),
    role: Optional[str] = Form(None),
    profile_status: Optional[str] = Form(None, alias="profileStatus"),
    profile_picture: Optional[UploadFile] = File(None, alias="profilePicture"),
    caller: Principal = Depends(get_principal),
    uow: UnitOfWork = Depends(get_unit_of_work),
    file_service: FileService = Depends(get_file_service),
    config=Depends(get_config),
):
    """
    Partial update; omitted fields are left unchanged

    Raises:
        - 400 Bad Request: Invalid role, weak password or bad image
        - 401 Unauthorized: Wrong current password on a self password change
        - 403 Forbidden: Not allowed to change this user or field
        - 404 Not Found: User not found
    """
    # Form parsing turns an empty value into None; an empty businessID from a
    # SUPER_ADMIN means unbind
    if business_id is None and is_super_admin(caller) and "businessID" in await request.form():
        business_id = ""

    command = UpdateUserCommand(
        first_name=first_name,
        last_name=last_name,
        email=email,
        notifications=notifications,
        phone_number=phone_number,
        password=password or None,
        current_password=current_password,
        business_id=business_id,
        role=_parse_role(role),
        profile_status=_parse_profile_status(profile_status),
        profile_picture=await read_upload(profile_picture, config.MAX_UPLOAD_BYTES),
        profile_picture_filename=profile_picture.filename if profile_picture else None,
    )

    result = await UpdateUserUseCase(uow, file_service).execute(caller, user_id, command)
    if result.is_err():
        raise_for_error(result.error)
    return result.value
