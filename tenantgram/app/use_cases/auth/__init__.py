"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .verify_email_use_case import VerifyEmailUseCase
from .resend_verification_use_case import ResendVerificationUseCase
from .oauth2_login_use_case import OAuth2LoginUseCase
from .get_current_user_use_case import GetCurrentUserUseCase
from .dtos import RegisterCommand, RegisterResponse, LoginResponse

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    "VerifyEmailUseCase",
    "ResendVerificationUseCase",
    "OAuth2LoginUseCase",
    "GetCurrentUserUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
]
