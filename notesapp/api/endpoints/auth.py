"""
Authentication Endpoints

Login exchanges email + password for a 24h bearer token.
"""
from fastapi import APIRouter, Depends

from notesapp.api.deps import get_repository, require_authenticated
from notesapp.core.exceptions import InvalidCredentialsError
from notesapp.core.principal import Principal
from notesapp.core.security import create_access_token, verify_password
from notesapp.repository import Repository
from notesapp.schemas.auth import CurrentUserResponse, LoginRequest, LoginResponse
from notesapp.schemas.user import UserResponse
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    repository: Repository = Depends(get_repository)
):
    """
    Authenticate user and return a JWT token.

    SECURITY: Unknown email, wrong password and a corrupt stored hash all
    produce the same 401 so accounts cannot be enumerated.
    """
    user = repository.find_user_by_email(credentials.email)

    if not user:
        log_security_event(
            "failed_login",
            {"reason": "user_not_found", "email": credentials.email.lower()},
            logger
        )
        raise InvalidCredentialsError()

    if not verify_password(credentials.password, user.hashed_password):
        log_security_event(
            "failed_login",
            {"reason": "invalid_password", "user_id": user.id, "tenant_id": user.tenant_id},
            logger
        )
        raise InvalidCredentialsError()

    tenant = repository.find_tenant_by_id(user.tenant_id)
    if tenant is None:
        logger.error(f"User {user.id} references missing tenant {user.tenant_id}")
        raise InvalidCredentialsError()

    token = create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role,
        tenant_id=tenant.id,
    )

    logger.info(f"Successful login: user={user.id}, tenant={tenant.id}")

    return LoginResponse(token=token, user=UserResponse.model_validate(user))


@router.get("/me", response_model=CurrentUserResponse)
def read_current_user(
    principal: Principal = Depends(require_authenticated)
):
    """Current user and tenant, as stored now rather than as in the token."""
    return CurrentUserResponse(user=UserResponse.model_validate(principal.user))
