"""
Tenant Scope Enforcement

Every read or write of tenant-owned data goes through TenantScope, which
pins the tenant id to the verified Principal. Request paths, query strings
and bodies are never consulted for a tenant id.

Two visibility policies, both intentional:
- Notes addressed by id: another tenant's note is reported as NotFound,
  so callers cannot discover which ids exist elsewhere.
- Tenants addressed by slug: another tenant's slug is rejected with 403.
"""
from typing import List

from notesapp.core.exceptions import (
    CrossTenantAccessError,
    NoteNotFoundError,
    TenantNotFoundError,
)
from notesapp.core.principal import Principal
from notesapp.core.quota import enforce_note_quota
from notesapp.models.note import Note
from notesapp.models.tenant import Tenant
from notesapp.repository import Repository
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)


class TenantScope:
    """Note and tenant operations restricted to the principal's tenant."""

    def __init__(self, repository: Repository, principal: Principal):
        self.repository = repository
        self.principal = principal

    @property
    def tenant_id(self) -> str:
        return self.principal.tenant_id

    def list_notes(self) -> List[Note]:
        return self.repository.list_notes(self.tenant_id)

    def get_note(self, note_id: str) -> Note:
        note = self.repository.find_note(note_id, self.tenant_id)
        if note is None:
            logger.debug(f"Note {note_id} not visible to tenant {self.tenant_id}")
            raise NoteNotFoundError()
        return note

    def create_note(self, title: str, content: str) -> Note:
        enforce_note_quota(self.repository, self.principal.tenant)
        note = self.repository.create_note(
            tenant_id=self.tenant_id,
            author_id=self.principal.user_id,
            title=title,
            content=content,
        )
        logger.info(f"Note created: {note.id} in tenant {self.tenant_id}")
        return note

    def update_note(self, note_id: str, title: str, content: str) -> Note:
        note = self.get_note(note_id)
        return self.repository.update_note(note, title=title, content=content)

    def delete_note(self, note_id: str) -> None:
        note = self.get_note(note_id)
        self.repository.delete_note(note)
        logger.info(f"Note deleted: {note_id} by {self.principal.user_id}")

    def note_count(self) -> int:
        return self.repository.count_notes_for_tenant(self.tenant_id)

    def tenant_by_slug(self, slug: str) -> Tenant:
        """
        Resolve a slug and require it to name the caller's own tenant.

        Raises TenantNotFoundError for an unknown slug and
        CrossTenantAccessError for another tenant's slug.
        """
        tenant = self.repository.find_tenant_by_slug(slug)
        if tenant is None:
            raise TenantNotFoundError()

        if tenant.id != self.tenant_id:
            log_security_event(
                "cross_tenant_access",
                {
                    "user_id": self.principal.user_id,
                    "tenant_id": self.tenant_id,
                    "target_tenant_id": tenant.id,
                },
                logger
            )
            raise CrossTenantAccessError()
        return tenant
