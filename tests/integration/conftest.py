from io import BytesIO

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from PIL import Image
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from tenantgram.adapter.services.local_file_storage import LocalFileStorage
from tenantgram.api.app import create_app
from tenantgram.app.services.email_service import IEmailService
from tenantgram.app.services.passwords import hash_password
from tenantgram.domain.entities import Business, User, UserRole

DEFAULT_PASSWORD = "Secret1!"


class RecordingEmailService(IEmailService):
    """Keeps outgoing mail in memory instead of calling SendGrid"""

    def __init__(self):
        self.sent = []

    async def send_email(self, recipient: str, subject: str, body: str) -> None:
        self.sent.append({"to": recipient, "subject": subject, "body": body})

    def last_link_token(self) -> str:
        return self.sent[-1]["body"].split("token=")[1].strip()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_service():
    return RecordingEmailService()


@pytest.fixture
def app(tmp_path, session_factory, email_service):
    class TestConfig(ApplicationConfig):
        UPLOAD_PATH = str(tmp_path / "uploads")
        SERVER_NAME = "test"
        CORS_ORIGINS = ["http://localhost:3000"]

    return create_app(
        TestConfig,
        session_factory=session_factory,
        email_service=email_service,
        file_storage=LocalFileStorage(TestConfig.UPLOAD_PATH),
    )


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_business(db_session):
    async def _create(name="Acme", deleted=False) -> Business:
        business = Business(name=name, deleted=deleted)
        db_session.add(business)
        await db_session.commit()
        return business

    return _create


@pytest.fixture
def create_user(db_session):
    async def _create(
        email="member@example.com",
        role=UserRole.DEFAULT,
        business_id="",
        password=DEFAULT_PASSWORD,
        **fields,
    ) -> User:
        user = User(
            email=email,
            role=role,
            business_id=business_id,
            password_hash=hash_password(password),
            email_verified=True,
            **fields,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _create


@pytest.fixture
def auth_headers(app):
    def _headers(user: User) -> dict:
        return {"Authorization": f"Bearer {app.state.jwt_service.issue(user)}"}

    return _headers


@pytest.fixture
def png_bytes():
    buffer = BytesIO()
    Image.new("RGB", (8, 8), (200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()
