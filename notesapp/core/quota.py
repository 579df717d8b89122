"""
Subscription Quotas

Free-tier tenants may hold at most FREE_TIER_NOTE_LIMIT notes; pro tenants
are unlimited.

KNOWN LIMITATION: the check counts and then the caller inserts, with no
lock in between. Two concurrent creates from one tenant can both pass and
leave the tenant one note over the limit. This is accepted soft-limit
behaviour; sequential requests can never overshoot.
"""
from typing import Optional

from notesapp.config import get_settings
from notesapp.core.exceptions import QuotaExceededError
from notesapp.models.tenant import Tenant
from notesapp.repository import Repository
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)


def note_limit_for(tenant: Tenant) -> Optional[int]:
    """Maximum number of notes for the tenant's tier, None for unlimited."""
    if tenant.is_pro:
        return None
    return get_settings().FREE_TIER_NOTE_LIMIT


def enforce_note_quota(repository: Repository, tenant: Tenant) -> None:
    """
    Raise QuotaExceededError if the tenant cannot create another note.

    Call immediately before inserting the note.
    """
    limit = note_limit_for(tenant)
    if limit is None:
        return

    count = repository.count_notes_for_tenant(tenant.id)
    if count >= limit:
        log_security_event(
            "quota_exceeded",
            {"tenant_id": tenant.id, "limit": limit, "count": count},
            logger
        )
        raise QuotaExceededError(limit)
