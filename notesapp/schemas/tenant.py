"""
Tenant Schemas
"""
from typing import Optional

from pydantic import BaseModel

from notesapp.models.tenant import SubscriptionTier


class TenantSummary(BaseModel):
    id: str
    slug: str
    name: str
    subscription: SubscriptionTier

    model_config = {"from_attributes": True}


class TenantUsageResponse(TenantSummary):
    """Tenant plus current note usage. note_limit is None on pro."""
    note_count: int
    note_limit: Optional[int]


class UpgradeResponse(BaseModel):
    message: str
    tenant: TenantSummary
