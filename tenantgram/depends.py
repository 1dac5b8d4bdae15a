from typing import Optional

from fastapi import Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from tenantgram.libs.result import Error
from tenantgram.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from tenantgram.api.error import ClientError
from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.authorization import Principal
from tenantgram.app.services.email_service import IEmailService
from tenantgram.app.services.file_service import FileService
from tenantgram.app.services.file_storage import IFileStorage
from tenantgram.app.services.oauth2 import IOAuth2Client

security = HTTPBearer(auto_error=False)


def build_session_factory(db_uri: str):
    engine = create_async_engine(db_uri, echo=False, future=True)
    session_factory = sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    return engine, session_factory


async def get_session(request: Request) -> AsyncSession:
    async with request.app.state.session_factory() as session:
        yield session


async def get_unit_of_work(session: AsyncSession = Depends(get_session)):
    yield SqlAlchemyUnitOfWork(session)


def get_config(request: Request):
    return request.app.state.config


def get_jwt_service(request: Request) -> JwtService:
    return request.app.state.jwt_service


def get_email_service(request: Request) -> IEmailService:
    return request.app.state.email_service


def get_file_storage(request: Request) -> IFileStorage:
    return request.app.state.file_storage


def get_file_service(request: Request) -> FileService:
    return request.app.state.file_service


def get_oauth2_client(request: Request) -> IOAuth2Client:
    return request.app.state.oauth2_client


def get_principal(request: Request) -> Principal:
    """
    The caller resolved by the security middleware.

    Raises:
        ClientError: 401 when the route was reached without a principal
    """
    principal: Optional[Principal] = getattr(request.state, "principal", None)
    if principal is None:
        raise ClientError(
            Error("UNAUTHORIZED", "Authentication required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return principal


async def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Raw bearer token for handlers on public paths that still read one"""
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("UNAUTHORIZED", "Missing bearer token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
    return credentials.credentials
