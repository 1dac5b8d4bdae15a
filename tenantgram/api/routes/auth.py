from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import EmailStr, Field

from tenantgram.api.error import ClientError, ServerError, raise_for_error
from tenantgram.api.utils.jwt import JwtService
from tenantgram.api.utils.templates import render_template
from tenantgram.app.services.email_service import IEmailService
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.auth import (
    GetCurrentUserUseCase,
    LoginResponse,
    LoginUseCase,
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    RequestPasswordResetUseCase,
    ResendVerificationUseCase,
    ResetPasswordUseCase,
    VerifyEmailUseCase,
)
from tenantgram.app.use_cases.common import CamelModel
from tenantgram.depends import (
    get_bearer_token,
    get_config,
    get_email_service,
    get_jwt_service,
    get_unit_of_work,
)

router = APIRouter(prefix="/v1/auth", tags=["Authentication"])


class RegisterRequest(CamelModel):
    """
    Registration HTTP request payload

    Password strength is checked by the use case so the client gets the
    specific rule that failed.
    """

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    jwt_service: JwtService = Depends(get_jwt_service),
    email_service: IEmailService = Depends(get_email_service),
    config=Depends(get_config),
):
    """
    Register an email/password account

    The account starts as PENDING with an unverified email; a verification
    link is mailed and a token is issued right away.

    Raises:
        - 400 Bad Request: Password does not meet the policy
        - 409 Conflict: Email already registered
    """
    command = RegisterCommand(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
    )

    use_case = RegisterUseCase(uow, jwt_service, email_service, config.SERVER_NAME)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        elif error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    jwt_service: JwtService = Depends(get_jwt_service),
):
    """
    Raises:
        - 401 Unauthorized: Unknown email or wrong password (same message for both)
    """
    use_case = LoginUseCase(uow, jwt_service)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value


class EmailRequest(CamelModel):
    email: EmailStr


@router.post("/password-reset/request", response_class=PlainTextResponse)
async def request_password_reset(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_service: IEmailService = Depends(get_email_service),
    config=Depends(get_config),
):
    """
    Email a password reset link valid for 30 minutes

    Raises:
        - 404 Not Found: No account with this email
        - 500 Internal Server Error: Email could not be sent
    """
    use_case = RequestPasswordResetUseCase(uow, email_service, config.SERVER_NAME)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return PlainTextResponse(result.value.message)


@router.get("/password-reset", response_class=HTMLResponse)
async def password_reset_form(token: str = ""):
    """HTML form posting the new password back with the emailed token"""
    return HTMLResponse(render_template("reset-password.html", {"token": token}))


@router.post("/password-reset", response_class=HTMLResponse)
async def reset_password(
    token: str = Form(""),
    password: str = Form(""),
    confirm_password: str = Form("", alias="confirmPassword"),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Always answers with the result page; failures carry the reason"""
    use_case = ResetPasswordUseCase(uow)
    result = await use_case.execute(token, password, confirm_password)

    if result.is_err():
        context = {"success": False, "message": result.error.message}
    else:
        context = {"success": True, "message": result.value.message}
    return HTMLResponse(render_template("password-reset-result.html", context))


@router.get("/verify-email", response_class=HTMLResponse)
async def verify_email(token: str = "", uow: UnitOfWork = Depends(get_unit_of_work)):
    use_case = VerifyEmailUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        context = {"success": False, "message": result.error.message}
    else:
        context = {"success": True, "message": result.value.message}
    return HTMLResponse(render_template("email-verification-result.html", context))


@router.post("/resend-verification", response_class=PlainTextResponse)
async def resend_verification(
    request: EmailRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_service: IEmailService = Depends(get_email_service),
    config=Depends(get_config),
):
    """
    Replace the user's verification token and email a fresh link

    Raises:
        - 400 Bad Request: Email already verified
        - 404 Not Found: No account with this email
        - 500 Internal Server Error: Email could not be sent
    """
    use_case = ResendVerificationUseCase(uow, email_service, config.SERVER_NAME)
    result = await use_case.execute(request.email)

    if result.is_err():
        raise_for_error(result.error)

    return PlainTextResponse(result.value.message)


@router.get("/me", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def me(
    token: str = Depends(get_bearer_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    jwt_service: JwtService = Depends(get_jwt_service),
):
    """
    Current user plus the token it was requested with

    Raises:
        - 401 Unauthorized: Missing or invalid token, or the user no longer exists
    """
    use_case = GetCurrentUserUseCase(uow, jwt_service)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_TOKEN", "USER_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value
