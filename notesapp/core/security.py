"""
Security Module

Handles password hashing and JWT token generation/validation.
Uses passlib with bcrypt and python-jose.

SECURITY NOTES:
- Passwords are hashed with bcrypt at cost 12 (slow by design)
- Tokens expire after ACCESS_TOKEN_EXPIRE_HOURS (24h); there is no
  revocation list, so expiry is the only way a token dies server-side
- Token claims are informational: role and tenant are re-read from
  storage on every request (see notesapp.core.principal)
"""
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from notesapp.config import get_settings
from notesapp.models.user import UserRole

REQUIRED_CLAIMS = ("sub", "email", "role", "tenant_id", "iat", "exp")


class TokenClaims(BaseModel):
    """Decoded identity assertion carried by an access token."""

    user_id: str
    email: str
    role: UserRole
    tenant_id: str
    issued_at: datetime
    expires_at: datetime


@lru_cache()
def get_pwd_context() -> CryptContext:
    """
    Password hashing context.

    Built lazily so BCRYPT_ROUNDS can be lowered by the test suite.
    """
    settings = get_settings()
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.BCRYPT_ROUNDS,
    )


def get_password_hash(password: str) -> str:
    """
    Hash a password using bcrypt.

    NOTE: This is intentionally slow. Don't call it in hot paths.
    """
    return get_pwd_context().hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    bcrypt compares in constant time. A malformed or unrecognised hash
    counts as a mismatch so it is indistinguishable from a wrong password.
    """
    if not hashed_password:
        return False
    try:
        return get_pwd_context().verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: str,
    email: str,
    role: UserRole,
    tenant_id: str,
    now: Optional[datetime] = None,
) -> str:
    """
    Create a signed JWT access token.

    Token payload:
    - sub: user id
    - email, role, tenant_id: for client display only
    - iat / exp: issue time and issue time + ACCESS_TOKEN_EXPIRE_HOURS
    """
    settings = get_settings()
    issued_at = (now or datetime.now(timezone.utc)).replace(microsecond=0)
    expires_at = issued_at + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)

    payload = {
        "sub": user_id,
        "email": email,
        "role": UserRole(role).value,
        "tenant_id": tenant_id,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Optional[TokenClaims]:
    """
    Decode and verify a JWT token.

    Returns the claims if valid, None if the signature, structure or
    expiry check fails. Never returns a partially trusted payload.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            options={"require_exp": True, "require_iat": True, "require_sub": True},
        )
    except JWTError:
        # Token invalid, expired, or tampered with
        return None

    if any(payload.get(claim) in (None, "") for claim in REQUIRED_CLAIMS):
        return None

    try:
        return TokenClaims(
            user_id=payload["sub"],
            email=payload["email"],
            role=payload["role"],
            tenant_id=payload["tenant_id"],
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (ValueError, TypeError):
        return None
