from fastapi import status
from fastapi.responses import JSONResponse

from tenantgram.libs.result import Error


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def error_response(status_code: int, code: str, message: str, headers=None) -> JSONResponse:
    """The ``{"error": {"code", "message"}}`` envelope used by every JSON failure"""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
        headers=headers,
    )


CLIENT_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
    "PASSWORD_MISMATCH": status.HTTP_400_BAD_REQUEST,
    "INVALID_ROLE": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_MEDIA_TYPE": status.HTTP_400_BAD_REQUEST,
    "ALREADY_ASSIGNED": status.HTTP_400_BAD_REQUEST,
    "ALREADY_VERIFIED": status.HTTP_400_BAD_REQUEST,
    "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
    "TOKEN_EXPIRED": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_PROVIDER": status.HTTP_400_BAD_REQUEST,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "INSUFFICIENT_ROLE": status.HTTP_403_FORBIDDEN,
    "CROSS_TENANT_ACCESS": status.HTTP_403_FORBIDDEN,
    "ACCESS_DENIED": status.HTTP_403_FORBIDDEN,
    "NO_BUSINESS": status.HTTP_403_FORBIDDEN,
    "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "BUSINESS_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "POST_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FILE_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "FILE_TOO_LARGE": status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
}


def raise_for_error(error: Error) -> None:
    """
    Raise the HTTP error for a failed use case.

    Known business codes become ClientError with their status; anything else
    (email, codec and storage failures) is a ServerError.
    """
    status_code = CLIENT_ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)
