import base64
import binascii
from datetime import UTC, datetime, timedelta
from typing import Optional

from jose import ExpiredSignatureError, JWTError, jwt

from tenantgram.domain.entities import User

ALGORITHM = "HS256"


class TokenError(Exception):
    pass


class MalformedToken(TokenError):
    pass


class ExpiredToken(TokenError):
    pass


class JwtService:
    """
    Issues and validates HS256 bearer tokens.

    Claims: ``sub`` and ``email`` (the user's email), ``role``, ``iat``, ``exp``.
    Expiration is the only invalidator; there is no refresh or revocation.
    """

    def __init__(self, secret_b64: str, expiration_ms: int):
        try:
            self.key = base64.b64decode(secret_b64, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError("JWT secret must be Base64 encoded") from e
        self.expiration = timedelta(milliseconds=int(expiration_ms))

    @classmethod
    def from_config(cls, config) -> "JwtService":
        return cls(config.JWT_SECRET, config.JWT_EXPIRATION_MS)

    def issue(self, user: User, now: Optional[datetime] = None) -> str:
        """
        Generate an access token for a user

        Args:
            user: User the token is issued to
            now: Issue time (defaults to the current UTC time)

        Returns:
            JWT token string (HS256)
        """
        now = now or datetime.now(UTC)
        role = user.role.value if user.role is not None else None
        payload = {
            "sub": user.email,
            "email": user.email,
            "role": role,
            "iat": int(now.timestamp()),
            "exp": int((now + self.expiration).timestamp()),
        }
        return jwt.encode(payload, self.key, algorithm=ALGORITHM)

    def claims(self, token: str) -> dict:
        """
        Verify and decode a token

        Raises:
            ExpiredToken: signature valid but now >= exp
            MalformedToken: bad signature or format
        """
        try:
            return jwt.decode(token, self.key, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            raise ExpiredToken("Token has expired") from e
        except JWTError as e:
            raise MalformedToken("Invalid token") from e

    def subject(self, token: str) -> str:
        subject = self.claims(token).get("sub")
        if not subject:
            raise MalformedToken("Token has no subject")
        return subject

    def role(self, token: str) -> Optional[str]:
        return self.claims(token).get("role")

    def is_valid(self, token: str, expected_subject: str) -> bool:
        try:
            claims = self.claims(token)
        except TokenError:
            return False
        return claims.get("sub") == expected_subject
