import pytest
from unittest.mock import AsyncMock, MagicMock

from tenantgram.api.utils.jwt import JwtService
from tenantgram.app.services.authorization import Principal
from tenantgram.domain.entities import ProfileStatus, UserRole

TEST_JWT_SECRET = "dGVzdC1zaWduaW5nLXNlY3JldC1mb3ItdW5pdC10ZXN0cy0wMTIzNDU2Nzg5"

REPOSITORY_METHODS = {
    "users": [
        "get_by_id",
        "get_by_email",
        "exists_by_email",
        "list_all",
        "list_by_business",
        "create",
        "update",
    ],
    "businesses": ["get_by_id", "list_active", "create", "update"],
    "posts": ["get_by_id", "list_by_business", "create", "update", "delete", "adjust_likes"],
    "likes": [
        "get_by_user_and_post",
        "get_by_user_and_posts",
        "create",
        "update",
        "delete_by_post",
    ],
    "files": [
        "get_by_stored_filename",
        "list_by_business_and_status",
        "list_by_hash",
        "create",
        "update",
    ],
    "password_reset_tokens": ["get_by_token_hash", "create", "delete"],
    "email_verification_tokens": ["get_by_token_hash", "get_by_user_id", "create", "delete"],
}


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    for repository, methods in REPOSITORY_METHODS.items():
        repo = MagicMock()
        for method in methods:
            setattr(repo, method, AsyncMock())
        setattr(uow, repository, repo)

    # Repositories hand back what they were given
    uow.users.create.side_effect = lambda user: user
    uow.users.update.side_effect = lambda user: user
    uow.businesses.create.side_effect = lambda business: business
    uow.businesses.update.side_effect = lambda business: business
    uow.posts.create.side_effect = lambda post: post
    uow.posts.update.side_effect = lambda post: post
    uow.likes.create.side_effect = lambda like: like
    uow.likes.update.side_effect = lambda like: like
    uow.files.create.side_effect = lambda metadata: metadata
    uow.files.update.side_effect = lambda metadata: metadata
    uow.files.list_by_hash.return_value = []

    return uow


@pytest.fixture
def jwt_service():
    return JwtService(TEST_JWT_SECRET, 3_600_000)


@pytest.fixture
def email_service():
    service = MagicMock()
    service.send_email = AsyncMock()
    return service


@pytest.fixture
def make_principal():
    def _make(
        role=UserRole.DEFAULT,
        business_id="biz-1",
        user_id="user-1",
        email="member@example.com",
        profile_status=ProfileStatus.ACTIVE,
    ):
        return Principal(
            id=user_id,
            email=email,
            role=role,
            business_id=business_id,
            profile_status=profile_status,
        )

    return _make
