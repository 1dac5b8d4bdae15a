"""
Request security pipeline.

Every request runs through the same ordered filters, sharing one
RequestContext:

1. token -> principal (skipped on public paths)
2. lifecycle gate
3. rate limit
4. route role check

A filter either returns a response, which ends the request, or None to pass
the request on. Rate limiting runs after identity resolution so the caller's
tier is known, and before the handler so rejected requests cost no backend I/O.
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from tenantgram.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantgram.api.error import error_response
from tenantgram.api.utils.jwt import ExpiredToken, TokenError
from tenantgram.app.services.authorization import (
    Principal,
    RouteRule,
    lifecycle_denial,
    role_allowed,
    rule_for,
)
from tenantgram.app.services.rate_limiter import RateLimitDecision

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass
class RequestContext:
    request: Request
    rule: RouteRule
    principal: Optional[Principal] = None
    denial: Optional[str] = None
    rate_limit: Optional[RateLimitDecision] = None

    @property
    def public(self) -> bool:
        return self.rule.public


Filter = Callable[[RequestContext], Awaitable[Optional[Response]]]


def _unauthorized(code: str, message: str) -> Response:
    return error_response(
        status.HTTP_401_UNAUTHORIZED,
        code,
        message,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def resolve_principal(ctx: RequestContext) -> Optional[Response]:
    """Parse the bearer token and load the user and tenant behind it"""
    if ctx.public:
        return None

    header = ctx.request.headers.get("Authorization", "")
    if not header.startswith(BEARER_PREFIX) or not header[len(BEARER_PREFIX):].strip():
        return _unauthorized("UNAUTHORIZED", "Authentication required")
    token = header[len(BEARER_PREFIX):].strip()

    state = ctx.request.app.state
    try:
        email = state.jwt_service.subject(token)
    except ExpiredToken:
        return _unauthorized("INVALID_TOKEN", "Token has expired")
    except TokenError:
        return _unauthorized("INVALID_TOKEN", "Invalid token")

    async with state.session_factory() as session:
        async with SqlAlchemyUnitOfWork(session) as uow:
            user = await uow.users.get_by_email(email)
            if user is None:
                return _unauthorized("UNAUTHORIZED", "Unknown principal")

            principal = Principal.from_user(user)
            business = None
            if principal.business_id:
                business = await uow.businesses.get_by_id(principal.business_id)
            ctx.denial = lifecycle_denial(principal, business)

    ctx.principal = principal
    ctx.request.state.principal = principal
    return None


async def lifecycle_gate(ctx: RequestContext) -> Optional[Response]:
    """Inactive profiles and users of deleted tenants are refused"""
    if ctx.principal is None or ctx.denial is None:
        return None

    logger.info(f"Lifecycle gate denied {ctx.principal.email}: {ctx.denial}")
    if ctx.denial == "TENANT_DELETED":
        message = "Your business has been deleted"
    else:
        message = "Your profile is not active"
    return error_response(status.HTTP_403_FORBIDDEN, ctx.denial, message)


async def rate_limit(ctx: RequestContext) -> Optional[Response]:
    state = ctx.request.app.state
    if not state.config.RATE_LIMIT_ENABLED:
        return None

    limiter = state.rate_limiter
    principal = ctx.principal
    client = ctx.request.client
    key = limiter.key_for(
        principal.email if principal else None,
        client.host if client else None,
    )
    capacity = limiter.capacity_for(
        principal.role if principal else None, authenticated=principal is not None
    )

    decision = limiter.try_consume(key, capacity)
    ctx.rate_limit = decision
    if decision.allowed:
        return None

    logger.warning(f"Rate limit exceeded for {key}")
    return PlainTextResponse(
        "Too many requests. Please try again later.",
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        headers={
            "Retry-After": str(decision.retry_after),
            "X-RateLimit-Limit": str(decision.limit),
            "X-RateLimit-Remaining": "0",
        },
    )


async def authorize_route(ctx: RequestContext) -> Optional[Response]:
    if ctx.public or ctx.principal is None:
        return None
    if role_allowed(ctx.rule, ctx.principal.role):
        return None
    return error_response(
        status.HTTP_403_FORBIDDEN,
        "INSUFFICIENT_ROLE",
        "You do not have permission to access this resource",
    )


DEFAULT_FILTERS: List[Filter] = [resolve_principal, lifecycle_gate, rate_limit, authorize_route]


class SecurityMiddleware(BaseHTTPMiddleware):
    """Runs the security filters in order before dispatching to the router."""

    def __init__(self, app: ASGIApp, filters: Optional[List[Filter]] = None) -> None:
        super().__init__(app)
        self.filters = list(filters or DEFAULT_FILTERS)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        ctx = RequestContext(request=request, rule=rule_for(request.url.path))

        for run_filter in self.filters:
            response = await run_filter(ctx)
            if response is not None:
                return response

        response = await call_next(request)

        if ctx.rate_limit is not None:
            response.headers["X-RateLimit-Limit"] = str(ctx.rate_limit.limit)
            response.headers["X-RateLimit-Remaining"] = str(ctx.rate_limit.remaining)
        return response
