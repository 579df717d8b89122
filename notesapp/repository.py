"""
Storage Queries

The narrow set of queries the auth core depends on, plus the note
operations used by the tenant scope enforcer. Nothing outside this module
builds queries against tenants or users, so the storage backend can be
swapped by replacing this class.

Every note query takes tenant_id explicitly. Callers get it from the
verified Principal, never from request input.
"""
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from notesapp.models.note import Note
from notesapp.models.tenant import Tenant, SubscriptionTier
from notesapp.models.user import User


class Repository:
    """Query helper bound to a single request's session."""

    def __init__(self, db: Session):
        self.db = db

    # Users

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(
            User.email == email.strip().lower()
        ).first()

    def find_user_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    # Tenants

    def find_tenant_by_id(self, tenant_id: str) -> Optional[Tenant]:
        return self.db.query(Tenant).filter(Tenant.id == tenant_id).first()

    def find_tenant_by_slug(self, slug: str) -> Optional[Tenant]:
        return self.db.query(Tenant).filter(
            Tenant.slug == slug.strip().lower()
        ).first()

    def update_tenant_subscription(self, tenant: Tenant, tier: SubscriptionTier) -> Tenant:
        tenant.subscription = tier
        self.db.commit()
        self.db.refresh(tenant)
        return tenant

    # Notes

    def count_notes_for_tenant(self, tenant_id: str) -> int:
        return self.db.query(Note).filter(Note.tenant_id == tenant_id).count()

    def list_notes(self, tenant_id: str) -> List[Note]:
        return (
            self.db.query(Note)
            .options(joinedload(Note.author))
            .filter(Note.tenant_id == tenant_id)
            .order_by(Note.created_at.desc())
            .all()
        )

    def find_note(self, note_id: str, tenant_id: str) -> Optional[Note]:
        return (
            self.db.query(Note)
            .options(joinedload(Note.author))
            .filter(
                Note.id == note_id,
                Note.tenant_id == tenant_id,  # CRITICAL: Tenant isolation
            )
            .first()
        )

    def create_note(self, tenant_id: str, author_id: str, title: str, content: str) -> Note:
        note = Note(
            tenant_id=tenant_id,
            author_id=author_id,
            title=title,
            content=content,
        )
        self.db.add(note)
        self.db.commit()
        self.db.refresh(note)
        return note

    def update_note(self, note: Note, title: str, content: str) -> Note:
        note.title = title
        note.content = content
        self.db.commit()
        self.db.refresh(note)
        return note

    def delete_note(self, note: Note) -> None:
        self.db.delete(note)
        self.db.commit()
