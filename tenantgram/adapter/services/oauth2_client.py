import logging
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import httpx
from jose import JWTError, jwt

from tenantgram.app.services.oauth2 import IOAuth2Client, OAuth2Error, OAuth2Profile

logger = logging.getLogger(__name__)


class HttpxOAuth2Client(IOAuth2Client):
    """
    OAuth2 authorization-code client.

    Each provider registration is a mapping with ``client_id``,
    ``client_secret``, ``authorization_uri``, ``token_uri``, ``scope``,
    ``redirect_uri`` and an optional ``userinfo_uri``. Providers without a
    userinfo endpoint (Apple) have their profile read from the ``id_token``
    returned by the token endpoint.
    """

    def __init__(
        self,
        registrations: Mapping[str, Mapping[str, Any]],
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.registrations = {k.lower(): dict(v) for k, v in (registrations or {}).items()}
        self.timeout = timeout
        self.transport = transport

    def _registration(self, provider: str) -> Dict[str, Any]:
        registration = self.registrations.get(provider.lower())
        if not registration or not registration.get("client_id"):
            raise OAuth2Error(f"OAuth2 provider not configured: {provider}")
        return registration

    def is_supported(self, provider: str) -> bool:
        registration = self.registrations.get(provider.lower())
        return bool(registration and registration.get("client_id"))

    def authorization_url(self, provider: str, state: str) -> str:
        registration = self._registration(provider)
        params = {
            "response_type": "code",
            "client_id": registration["client_id"],
            "redirect_uri": registration["redirect_uri"],
            "scope": registration.get("scope", "openid email profile"),
            "state": state,
        }
        if registration.get("response_mode"):
            params["response_mode"] = registration["response_mode"]
        return f"{registration['authorization_uri']}?{urlencode(params)}"

    async def fetch_profile(self, provider: str, code: str) -> OAuth2Profile:
        registration = self._registration(provider)
        form = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": registration["redirect_uri"],
            "client_id": registration["client_id"],
            "client_secret": registration.get("client_secret", ""),
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                token_response = await client.post(
                    registration["token_uri"], data=form, headers={"Accept": "application/json"}
                )
                if token_response.status_code >= 300:
                    raise OAuth2Error(
                        f"Token exchange failed: {token_response.status_code}"
                    )
                tokens = token_response.json()

                userinfo_uri = registration.get("userinfo_uri")
                if userinfo_uri:
                    userinfo_response = await client.get(
                        userinfo_uri,
                        headers={"Authorization": f"Bearer {tokens.get('access_token', '')}"},
                    )
                    if userinfo_response.status_code >= 300:
                        raise OAuth2Error(
                            f"Userinfo request failed: {userinfo_response.status_code}"
                        )
                    attributes = userinfo_response.json()
                else:
                    attributes = self._id_token_claims(tokens)
        except httpx.HTTPError as e:
            raise OAuth2Error(f"{provider} exchange failed: {type(e).__name__}: {e}") from e
        except ValueError as e:
            raise OAuth2Error(f"{provider} returned an invalid response") from e

        email = attributes.get("email")
        if not email:
            raise OAuth2Error(f"{provider} did not return an email address")

        return OAuth2Profile(
            provider=provider.upper(),
            email=email,
            name=attributes.get("name"),
            picture=attributes.get("picture"),
        )

    @staticmethod
    def _id_token_claims(tokens: Mapping[str, Any]) -> Dict[str, Any]:
        # Received directly from the token endpoint over TLS
        id_token = tokens.get("id_token")
        if not id_token:
            raise OAuth2Error("Token response has no id_token")
        try:
            return jwt.get_unverified_claims(id_token)
        except JWTError as e:
            raise OAuth2Error("Malformed id_token") from e
