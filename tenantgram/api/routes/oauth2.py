"""
OAuth2 login.

``/oauth2/authorization/{provider}`` sends the browser to the provider with a
random state kept in a short-lived cookie. The provider calls back on
``/login/oauth2/code/{provider}`` (GET, or POST for form_post providers such as
Apple); the code is exchanged for the user's profile, the account is bridged to
a local user and the app is opened through its deep link with our token.
"""

import logging
import secrets
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse

from tenantgram.libs.result import Error
from tenantgram.api.error import raise_for_error
from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.oauth2 import IOAuth2Client
from tenantgram.app.services.unit_of_work import UnitOfWork
from tenantgram.app.use_cases.auth import OAuth2LoginUseCase
from tenantgram.depends import get_config, get_jwt_service, get_oauth2_client, get_unit_of_work

logger = logging.getLogger(__name__)

router = APIRouter(tags=["OAuth2"])

STATE_COOKIE = "oauth2_state"
STATE_MAX_AGE_SECONDS = 600


def deeplink(base: str, **params) -> str:
    separator = "&" if "?" in base else "?"
    return f"{base}{separator}{urlencode(params)}"


@router.get("/oauth2/authorization/{provider}")
async def authorize(provider: str, oauth2_client: IOAuth2Client = Depends(get_oauth2_client)):
    if not oauth2_client.is_supported(provider):
        raise_for_error(Error("UNSUPPORTED_PROVIDER", f"Unsupported provider: {provider}"))

    state = secrets.token_urlsafe(24)
    response = RedirectResponse(
        oauth2_client.authorization_url(provider, state),
        status_code=status.HTTP_302_FOUND,
    )
    # form_post callbacks arrive cross-site, so the cookie must be SameSite=None
    response.set_cookie(
        STATE_COOKIE,
        state,
        max_age=STATE_MAX_AGE_SECONDS,
        httponly=True,
        secure=True,
        samesite="none",
    )
    return response


async def _callback_params(request: Request) -> dict:
    if request.method == "POST":
        form = await request.form()
        return {k: v for k, v in form.items() if isinstance(v, str)}
    return dict(request.query_params)


@router.api_route("/login/oauth2/code/{provider}", methods=["GET", "POST"])
async def callback(
    provider: str,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    jwt_service: JwtService = Depends(get_jwt_service),
    oauth2_client: IOAuth2Client = Depends(get_oauth2_client),
    config=Depends(get_config),
):
    """
    Redirects (302) to ``<APP_DEEPLINK>?token=<jwt>&provider=<provider>`` on
    success and ``<APP_DEEPLINK>?error=auth_failed`` on any failure.
    """
    params = await _callback_params(request)
    failure = RedirectResponse(
        deeplink(config.APP_DEEPLINK, error="auth_failed"),
        status_code=status.HTTP_302_FOUND,
    )
    failure.delete_cookie(STATE_COOKIE)

    expected_state: Optional[str] = request.cookies.get(STATE_COOKIE)
    code = params.get("code")
    if params.get("error") or not code:
        logger.warning(f"OAuth2 callback for {provider} without code: {params.get('error')}")
        return failure
    if not expected_state or not secrets.compare_digest(
        expected_state.encode(), params.get("state", "").encode()
    ):
        logger.warning(f"OAuth2 state mismatch for {provider}")
        return failure

    try:
        profile = await oauth2_client.fetch_profile(provider, code)
        result = await OAuth2LoginUseCase(uow, jwt_service).execute(profile)
    except Exception:
        logger.exception(f"OAuth2 exchange failed for {provider}")
        return failure

    if result.is_err():
        logger.warning(f"OAuth2 login rejected: {result.error.code}")
        return failure

    response = RedirectResponse(
        deeplink(config.APP_DEEPLINK, token=result.value, provider=provider.lower()),
        status_code=status.HTTP_302_FOUND,
    )
    response.delete_cookie(STATE_COOKIE)
    return response
