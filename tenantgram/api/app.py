import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import SQLModel

from tenantgram.adapter.services.local_file_storage import LocalFileStorage
from tenantgram.adapter.services.oauth2_client import HttpxOAuth2Client
from tenantgram.adapter.services.sendgrid_email_service import SendGridEmailService
from tenantgram.api.middleware.security import SecurityMiddleware
from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.email_service import IEmailService
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.file_storage import IFileStorage
from tenantgram.app.services.oauth2 import IOAuth2Client
from tenantgram.app.services.rate_limiter import RateLimitConfig, RateLimiter
from tenantgram.depends import build_session_factory
from .error import ClientError, ServerError

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


def create_app(
    ApplicationConfig,
    session_factory=None,
    email_service: Optional[IEmailService] = None,
    file_storage: Optional[IFileStorage] = None,
    oauth2_client: Optional[IOAuth2Client] = None,
) -> FastAPI:
    """
    Build the application.

    Collaborators default to the production adapters built from
    ApplicationConfig; tests pass their own.
    """
    engine = None
    if session_factory is None:
        engine, session_factory = build_session_factory(ApplicationConfig.DB_URI)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # An injected session factory comes with its own schema
        if engine is not None:
            async with engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)
        yield
        if engine is not None:
            await engine.dispose()

    app = FastAPI(title="Tenantgram API", version="0.1.0", lifespan=lifespan)

    file_storage = file_storage or LocalFileStorage(ApplicationConfig.UPLOAD_PATH)
    app.state.config = ApplicationConfig
    app.state.session_factory = session_factory
    app.state.jwt_service = JwtService.from_config(ApplicationConfig)
    app.state.rate_limiter = RateLimiter(RateLimitConfig.from_app_config(ApplicationConfig))
    app.state.email_service = email_service or SendGridEmailService(
        ApplicationConfig.SENDGRID_API_KEY, ApplicationConfig.EMAIL_FROM
    )
    app.state.file_storage = file_storage
    app.state.file_service = FileService(file_storage)
    app.state.oauth2_client = oauth2_client or HttpxOAuth2Client(
        ApplicationConfig.OAUTH2_PROVIDERS
    )

    app.add_middleware(SecurityMiddleware)
    # Outermost, so preflight requests never reach the security pipeline
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from tenantgram.api.routes import auth, business, file, health_check, oauth2, post, user

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(oauth2.router, tags=["OAuth2"])
    app.include_router(user.router, tags=["User"])
    app.include_router(business.router, tags=["Business"])
    app.include_router(post.router, tags=["Posts"])
    app.include_router(file.router, tags=["Files"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)

    return app
