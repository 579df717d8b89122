"""
Custom Exceptions

Centralized exception definitions for better error handling.
Every class maps one failure kind onto a stable status code and a
machine-readable ``error_type``. The handlers in notesapp.main render them
as ``{"detail": ..., "type": ...}``.
"""
from typing import Any, Dict, Optional

from fastapi import HTTPException, status


class NotesAppError(HTTPException):
    """Base class for all errors raised by the service."""

    error_type = "error"

    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)

    def extra(self) -> Dict[str, Any]:
        """Additional keys merged into the response body."""
        return {}


class InvalidInputError(NotesAppError):
    """Raised when required input is missing or malformed."""

    error_type = "invalid_input"

    def __init__(self, detail: str = "Invalid input"):
        super().__init__(status.HTTP_400_BAD_REQUEST, detail)


class AuthenticationError(NotesAppError):
    """Raised when authentication fails."""

    error_type = "authentication_error"

    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status.HTTP_401_UNAUTHORIZED,
            detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidCredentialsError(AuthenticationError):
    """
    Unknown email or wrong password.

    Both cases use the same message so callers cannot tell them apart.
    """

    error_type = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid credentials")


class TokenInvalidError(AuthenticationError):
    """Missing, malformed, tampered or expired bearer token."""

    error_type = "token_invalid"

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(detail)


class InsufficientRoleError(NotesAppError):
    """Authenticated, but the role does not satisfy the requirement."""

    error_type = "insufficient_role"

    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail)


class CrossTenantAccessError(NotesAppError):
    """
    Raised when a caller addresses another tenant explicitly (by slug).

    Resource-id lookups never raise this; they report NotFound instead.
    """

    error_type = "cross_tenant_access"

    def __init__(self, detail: str = "Access denied"):
        super().__init__(status.HTTP_403_FORBIDDEN, detail)


class QuotaExceededError(NotesAppError):
    """Raised when a free-tier tenant reaches its note limit."""

    error_type = "quota_exceeded"

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(
            status.HTTP_403_FORBIDDEN,
            "Note limit reached. Upgrade to Pro for unlimited notes.",
        )

    def extra(self) -> Dict[str, Any]:
        return {"quota_exceeded": True, "limit": self.limit}


class NotFoundError(NotesAppError):
    """Generic not-found error."""

    error_type = "not_found"

    def __init__(self, detail: str = "Not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, detail)


class NoteNotFoundError(NotFoundError):
    """Note does not exist, or belongs to a different tenant."""

    def __init__(self):
        super().__init__("Note not found")


class TenantNotFoundError(NotFoundError):
    """Raised when tenant cannot be found."""

    def __init__(self):
        super().__init__("Tenant not found")
