"""
API Dependencies

Reusable FastAPI dependencies for authentication and authorization.
These are the only place authentication and role decisions are made;
endpoint bodies receive an already verified Principal.

PATTERN: Compose gates with Depends(), e.g.
``principal: Principal = Depends(require_role(UserRole.ADMIN))``.

Dependencies and DB-backed handlers must stay plain ``def`` functions.
FastAPI runs those in its threadpool; bcrypt and the blocking SQLAlchemy
queries would otherwise stall the event loop for every other request.
"""
from typing import Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from notesapp.core.permissions import check_role
from notesapp.core.principal import Principal, resolve_principal
from notesapp.core.scoping import TenantScope
from notesapp.database import get_db
from notesapp.models.user import UserRole
from notesapp.repository import Repository


def get_repository(db: Session = Depends(get_db)) -> Repository:
    return Repository(db)


def require_authenticated(
    request: Request,
    repository: Repository = Depends(get_repository)
) -> Principal:
    """
    Resolve the caller or fail with 401.

    The principal is also stored on request.state for logging and
    exception handlers.
    """
    principal = resolve_principal(request.headers.get("Authorization"), repository)
    request.state.principal = principal
    return principal


def require_role(role: UserRole) -> Callable:
    """
    Build a dependency requiring ``role`` or higher.

    Unauthenticated callers get 401, under-privileged ones 403.
    """

    def dependency(
        principal: Principal = Depends(require_authenticated)
    ) -> Principal:
        check_role(principal, role)
        return principal

    dependency.__name__ = f"require_{role.value}"
    return dependency


require_admin = require_role(UserRole.ADMIN)
require_member = require_role(UserRole.MEMBER)


def get_tenant_scope(
    principal: Principal = Depends(require_authenticated),
    repository: Repository = Depends(get_repository)
) -> TenantScope:
    """TenantScope for the authenticated caller."""
    return TenantScope(repository, principal)


def get_member_scope(
    principal: Principal = Depends(require_member),
    repository: Repository = Depends(get_repository)
) -> TenantScope:
    """TenantScope for callers with at least member role."""
    return TenantScope(repository, principal)


def get_admin_scope(
    principal: Principal = Depends(require_admin),
    repository: Repository = Depends(get_repository)
) -> TenantScope:
    """TenantScope for admins."""
    return TenantScope(repository, principal)
