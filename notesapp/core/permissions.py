"""
Permission System (RBAC)

Two roles in a strict hierarchy: ADMIN > MEMBER. Role checks go through
UserRole.satisfies() so an admin passes every member check and a member
never passes an admin check.
"""
from notesapp.core.exceptions import InsufficientRoleError
from notesapp.core.principal import Principal
from notesapp.models.user import UserRole
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)


def check_role(principal: Principal, required_role: UserRole) -> None:
    """
    Check if the principal has the required role level.

    Raises InsufficientRoleError otherwise.
    """
    if principal.role.satisfies(required_role):
        return

    log_security_event(
        "insufficient_role",
        {
            "user_id": principal.user_id,
            "tenant_id": principal.tenant_id,
            "role": principal.role.value,
            "required_role": required_role.value,
        },
        logger
    )
    if required_role is UserRole.ADMIN:
        raise InsufficientRoleError("Admin access required")
    raise InsufficientRoleError(f"This action requires {required_role.value} role or higher")
