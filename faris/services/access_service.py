"""Role and status gate evaluated once at route entry"""
from dataclasses import dataclass
from typing import Union

from faris.exceptions import (
    AccountPendingError,
    AdminRequiredError,
    AuthenticationRequiredError,
    BaseAppError,
)
from faris.models.user import ROLE_ADMIN, User

REASON_UNAUTHENTICATED = "unauthenticated"
REASON_INACTIVE = "inactive"
REASON_FORBIDDEN = "forbidden"


@dataclass(frozen=True)
class Authorized:
    user: User


@dataclass(frozen=True)
class Redirect:
    reason: str
    location: str


AccessDecision = Union[Authorized, Redirect]


def resolve_access(user: User | None, required_role: str | None = None) -> AccessDecision:
    """Decide whether `user` may enter a route needing `required_role`

    Admins are never gated on status. Students must be active, and
    admin-only routes send them back to their dashboard.
    """
    if user is None:
        return Redirect(REASON_UNAUTHENTICATED, "/login")
    if user.is_admin:
        return Authorized(user)
    if not user.is_active:
        return Redirect(REASON_INACTIVE, "/login")
    if required_role == ROLE_ADMIN:
        return Redirect(REASON_FORBIDDEN, "/dashboard")
    return Authorized(user)


_REDIRECT_ERRORS: dict[str, type[BaseAppError]] = {
    REASON_UNAUTHENTICATED: AuthenticationRequiredError,
    REASON_INACTIVE: AccountPendingError,
    REASON_FORBIDDEN: AdminRequiredError,
}


def enforce(decision: AccessDecision) -> User:
    """Return the authorized user or raise the error matching the redirect"""
    if isinstance(decision, Authorized):
        return decision.user
    error = _REDIRECT_ERRORS[decision.reason]()
    error.location = decision.location
    raise error
