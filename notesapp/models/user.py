"""
User Model

Users belong to exactly one tenant and carry a role for RBAC.

IMPORTANT: tenant_id and role are fixed at creation. Emails are unique
across the whole system, not per tenant, so login needs no tenant hint.
"""
from sqlalchemy import Column, String, DateTime, ForeignKey, Enum as SQLEnum
from sqlalchemy.orm import relationship, validates
from datetime import datetime
from notesapp.database import Base
import uuid
import enum


class UserRole(str, enum.Enum):
    """
    User roles for RBAC.

    ADMIN: everything a member can do, plus tenant administration (upgrades)
    MEMBER: note access within the tenant

    Always compare roles with satisfies() rather than ==, so admin keeps
    acting as a superset of member.
    """
    ADMIN = "admin"
    MEMBER = "member"

    def satisfies(self, required: "UserRole") -> bool:
        """True when this role meets the required role."""
        if self is UserRole.ADMIN:
            return True
        return self is required


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    # CRITICAL: Tenant foreign key for data isolation
    tenant_id = Column(
        String(36),
        ForeignKey("tenants.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    email = Column(String(255), unique=True, nullable=False, index=True)
    hashed_password = Column(String(255), nullable=False)

    role = Column(
        SQLEnum(UserRole, values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.MEMBER,
        nullable=False
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    tenant = relationship("Tenant", back_populates="users")
    notes = relationship("Note", back_populates="author")

    def __repr__(self):
        return f"<User {self.email} (tenant={self.tenant_id})>"

    @validates("email")
    def normalize_email(self, key, value):
        return value.strip().lower() if value else value
