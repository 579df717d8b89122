"""
Principal Resolution

Turns an Authorization header into the request's Principal: the live
User and Tenant records behind a verified token.

DESIGN: The token is only used as a lookup key. Role and tenant come from
the stored user on every request, so a demoted admin or a moved user
loses old rights as soon as the records change, even while their token is
still valid. This costs one user and one tenant read per request.
"""
from dataclasses import dataclass
from typing import Optional

from notesapp.core.exceptions import TokenInvalidError
from notesapp.core.security import decode_access_token
from notesapp.models.tenant import Tenant
from notesapp.models.user import User, UserRole
from notesapp.repository import Repository
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Principal:
    """Request-scoped identity. Created per request, never cached."""

    user: User
    tenant: Tenant

    @property
    def user_id(self) -> str:
        return self.user.id

    @property
    def tenant_id(self) -> str:
        return self.tenant.id

    @property
    def role(self) -> UserRole:
        return UserRole(self.user.role)


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    The scheme is matched exactly; anything else returns None.
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):]
    if not token or token != token.strip() or " " in token:
        return None
    return token


def resolve_principal(authorization: Optional[str], repository: Repository) -> Principal:
    """
    Resolve the caller from the Authorization header.

    Raises TokenInvalidError for a missing or malformed header, a bad or
    expired token, or a token whose user or tenant no longer exists.
    Storage is not touched unless the token verifies.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise TokenInvalidError()

    claims = decode_access_token(token)
    if claims is None:
        log_security_event("invalid_token", {"reason": "verification_failed"}, logger)
        raise TokenInvalidError()

    user = repository.find_user_by_id(claims.user_id)
    if user is None:
        log_security_event(
            "invalid_token",
            {"reason": "user_not_found", "user_id": claims.user_id},
            logger
        )
        raise TokenInvalidError()

    # Tenant comes from the stored user, not from the token claim
    tenant = repository.find_tenant_by_id(user.tenant_id)
    if tenant is None:
        logger.error(f"User {user.id} references missing tenant {user.tenant_id}")
        raise TokenInvalidError()

    if claims.tenant_id != tenant.id or claims.role != user.role:
        logger.info(
            f"Stale token claims for user {user.id}; using stored role and tenant",
            extra={"user_id": user.id, "tenant_id": tenant.id}
        )

    return Principal(user=user, tenant=tenant)
