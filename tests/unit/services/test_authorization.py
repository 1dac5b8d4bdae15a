import pytest

from tenantgram.app.services.authorization import (
    Principal,
    is_public_path,
    lifecycle_denial,
    path_matches,
    role_allowed,
    rule_for,
    same_tenant,
)
from tenantgram.domain.entities import Business, ProfileStatus, User, UserRole


def principal(role=UserRole.DEFAULT, business_id="biz-1", status=ProfileStatus.ACTIVE):
    return Principal(
        id="u1", email="u1@example.com", role=role, business_id=business_id, profile_status=status
    )


@pytest.mark.parametrize(
    "path",
    [
        "/actuator/health",
        "/v1/files/public/abc.png",
        "/v1/files/public/abc.png/metadata",
        "/oauth2/authorization/google",
        "/login/oauth2/code/apple",
        "/v1/auth/login",
        "/v1/auth/me",
    ],
)
def test_public_paths(path):
    assert is_public_path(path) is True


@pytest.mark.parametrize(
    "path",
    ["/v1/users/", "/v1/files/abc.png", "/v1/posts/", "/v1/business/b1/info", "/v1/other", "/"],
)
def test_protected_paths(path):
    assert is_public_path(path) is False


def test_prefix_match_does_not_leak_into_siblings():
    assert path_matches("/v1/auth/**", "/v1/auth") is True
    assert path_matches("/v1/auth/**", "/v1/authx/login") is False


@pytest.mark.parametrize(
    "path, role, allowed",
    [
        ("/v1/users/", UserRole.SUPER_ADMIN, True),
        ("/v1/users/", UserRole.DEFAULT, True),
        ("/v1/users/", UserRole.PENDING, False),
        ("/v1/posts/", UserRole.ADMIN, True),
        ("/v1/posts/", UserRole.DEFAULT, True),
        ("/v1/posts/", UserRole.SUPER_ADMIN, False),
        ("/v1/posts/", UserRole.PENDING, False),
        ("/v1/files/x.png", UserRole.PENDING, False),
        ("/v1/business/", UserRole.ADMIN, True),
        ("/v1/business/", None, False),
        ("/v1/anything-else", UserRole.PENDING, True),
    ],
)
def test_route_roles(path, role, allowed):
    assert role_allowed(rule_for(path), role) is allowed


def test_lifecycle_allows_active_member():
    assert lifecycle_denial(principal(), Business(id="biz-1", name="Acme")) is None


def test_lifecycle_blocks_inactive_profile():
    assert lifecycle_denial(principal(status=ProfileStatus.SUSPENDED), None) == "PROFILE_INACTIVE"


def test_lifecycle_blocks_deleted_tenant():
    business = Business(id="biz-1", name="Acme", deleted=True)

    assert lifecycle_denial(principal(), business) == "TENANT_DELETED"


def test_lifecycle_never_blocks_super_admin():
    business = Business(id="biz-1", name="Acme", deleted=True)
    admin = principal(role=UserRole.SUPER_ADMIN, status=ProfileStatus.INACTIVE)

    assert lifecycle_denial(admin, business) is None


def test_lifecycle_without_tenant_has_nothing_to_check():
    assert lifecycle_denial(principal(business_id=""), None) is None


def test_same_tenant_requires_a_tenant():
    assert same_tenant(principal(business_id="biz-1"), "biz-1") is True
    assert same_tenant(principal(business_id="biz-1"), "biz-2") is False
    assert same_tenant(principal(business_id=""), "") is False


def test_principal_snapshot_from_user():
    user = User(id="u9", email="x@example.com", role=UserRole.ADMIN, business_id="")

    snapshot = Principal.from_user(user)

    assert snapshot.id == "u9"
    assert snapshot.role == UserRole.ADMIN
    assert snapshot.business_id == ""
    assert snapshot.profile_status == ProfileStatus.ACTIVE
