"""
Authorization policy.

Route gates are a declarative table of path patterns; the first matching rule
wins. Method-level refinements (tenant ownership, self-service) live in the
use cases, which receive the calling Principal.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from tenantgram.domain.entities import Business, ProfileStatus, User, UserRole

ANY_MEMBER = frozenset({UserRole.SUPER_ADMIN, UserRole.ADMIN, UserRole.DEFAULT})
CONTENT_MEMBER = frozenset({UserRole.ADMIN, UserRole.DEFAULT})


@dataclass(frozen=True)
class Principal:
    """
    The authenticated caller, resolved once per request.

    A detached snapshot of the user row so handlers never touch an entity
    whose session has already closed.
    """

    id: str
    email: str
    role: Optional[UserRole]
    business_id: str
    profile_status: ProfileStatus

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            email=user.email,
            role=user.role,
            business_id=user.business_id or "",
            profile_status=user.profile_status,
        )


@dataclass(frozen=True)
class RouteRule:
    pattern: str
    public: bool = False
    roles: Optional[FrozenSet[UserRole]] = None

    def matches(self, path: str) -> bool:
        return path_matches(self.pattern, path)


ROUTE_RULES: Tuple[RouteRule, ...] = (
    RouteRule("/actuator/**", public=True),
    RouteRule("/v1/files/public/**", public=True),
    RouteRule("/oauth2/**", public=True),
    RouteRule("/login/oauth2/code/**", public=True),
    RouteRule("/v1/auth/**", public=True),
    RouteRule("/v1/users/**", roles=ANY_MEMBER),
    RouteRule("/v1/files/**", roles=ANY_MEMBER),
    RouteRule("/v1/posts/**", roles=CONTENT_MEMBER),
    RouteRule("/v1/business/**", roles=ANY_MEMBER),
)

# Authenticated callers only
DEFAULT_RULE = RouteRule("/**")


def path_matches(pattern: str, path: str) -> bool:
    """Match ``/prefix/**`` (the prefix itself and anything below it) or an exact path."""
    if pattern.endswith("/**"):
        prefix = pattern[:-3]
        return path == prefix or path.startswith(prefix + "/")
    return path == pattern


def rule_for(path: str) -> RouteRule:
    for rule in ROUTE_RULES:
        if rule.matches(path):
            return rule
    return DEFAULT_RULE


def is_public_path(path: str) -> bool:
    return rule_for(path).public


def role_allowed(rule: RouteRule, role: Optional[UserRole]) -> bool:
    if rule.public or rule.roles is None:
        return True
    return role in rule.roles


def lifecycle_denial(user: Principal, business: Optional[Business]) -> Optional[str]:
    """
    Return the error code that blocks this user, or None.

    SUPER_ADMIN is never blocked. A user without a tenant has no deletion
    flag to check.
    """
    if user.role == UserRole.SUPER_ADMIN:
        return None
    if user.profile_status != ProfileStatus.ACTIVE:
        return "PROFILE_INACTIVE"
    if business is not None and business.deleted:
        return "TENANT_DELETED"
    return None


def is_super_admin(user: Principal) -> bool:
    return user.role == UserRole.SUPER_ADMIN


def is_admin(user: Principal) -> bool:
    return user.role == UserRole.ADMIN


def same_tenant(user: Principal, business_id: Optional[str]) -> bool:
    return bool(user.business_id) and user.business_id == business_id
