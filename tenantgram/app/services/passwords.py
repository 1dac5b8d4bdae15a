"""
Password hashing and strength policy.

Hashes use bcrypt with cost factor 12; verification is constant-time.
"""

import re
from typing import Optional

import bcrypt

BCRYPT_ROUNDS = 12
MIN_LENGTH = 8
MAX_LENGTH = 50

SPECIAL_CHARACTERS = "!@#$%^&*()-_=+\\|[{]};:'\",<.>/?"

_UPPERCASE = re.compile(r"[A-Z]")
_LOWERCASE = re.compile(r"[a-z]")
_DIGIT = re.compile(r"\d")
_SPECIAL = re.compile("[" + re.escape(SPECIAL_CHARACTERS) + "]")


def _encode(password: str) -> bytes:
    # bcrypt only consumes the first 72 bytes
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    """
    Check a password against a stored hash.

    Accounts without a hash (federated sign-in) still pay for one bcrypt
    round so response timing does not reveal them.
    """
    if not password_hash:
        bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(BCRYPT_ROUNDS))
        return False
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


def validate_password(password: str) -> Optional[str]:
    """
    Validate password strength.

    Returns:
        A human-readable description of the first violated rule, or None
    """
    if len(password) < MIN_LENGTH or len(password) > MAX_LENGTH:
        return f"Password must be between {MIN_LENGTH} and {MAX_LENGTH} characters"

    if not _UPPERCASE.search(password):
        return "Password must contain at least one uppercase letter"

    if not _LOWERCASE.search(password):
        return "Password must contain at least one lowercase letter"

    if not _SPECIAL.search(password):
        return "Password must contain at least one special character"

    if not _DIGIT.search(password):
        return "Password must contain at least one number"

    return None
