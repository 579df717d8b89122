"""
Note Model

Notes are the tenant-owned resource of the service and the one that is
subject to the free-tier quota.
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from notesapp.database import Base
import uuid


class Note(Base):
    __tablename__ = "notes"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # CRITICAL: Tenant foreign key for isolation
    tenant_id = Column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    author_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    tenant = relationship("Tenant", back_populates="notes")
    author = relationship("User", back_populates="notes")

    __table_args__ = (
        # Listing and counting are always per tenant, newest first
        Index('idx_note_tenant_created', 'tenant_id', 'created_at'),
    )

    def __repr__(self):
        return f"<Note {self.title} (tenant={self.tenant_id})>"

    @property
    def author_email(self):
        return self.author.email if self.author else None
