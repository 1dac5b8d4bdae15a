import hashlib
import secrets
from typing import Tuple

TOKEN_BYTES = 32


def hash_token(raw_token: str) -> str:
    """SHA-256 hex digest; the only form of an emailed token that is stored"""
    return hashlib.sha256(raw_token.encode()).hexdigest()


def new_opaque_token() -> Tuple[str, str]:
    """Return (raw token for the email link, hash for storage)"""
    raw_token = secrets.token_urlsafe(TOKEN_BYTES)
    return raw_token, hash_token(raw_token)


def verification_link(server_name: str, raw_token: str) -> str:
    return f"https://{server_name}/v1/auth/verify-email?token={raw_token}"


def password_reset_link(server_name: str, raw_token: str) -> str:
    return f"https://{server_name}/v1/auth/password-reset?token={raw_token}"
