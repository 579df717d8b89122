"""
Database Models

Every tenant-owned model carries tenant_id for multi-tenant isolation.
"""
from notesapp.models.tenant import Tenant, SubscriptionTier
from notesapp.models.user import User, UserRole
from notesapp.models.note import Note

__all__ = ["Tenant", "SubscriptionTier", "User", "UserRole", "Note"]
