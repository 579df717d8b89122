"""
User Schemas

Response models for user data. Password hashes are never serialized.
"""
from pydantic import BaseModel

from notesapp.models.user import UserRole
from notesapp.schemas.tenant import TenantSummary


class UserResponse(BaseModel):
    """User with the tenant they belong to."""
    id: str
    email: str
    role: UserRole
    tenant_id: str
    tenant: TenantSummary

    model_config = {"from_attributes": True}
