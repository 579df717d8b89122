"""
Tenant Model

The tenant is the primary isolation boundary. Each tenant is a separate
organization with its own users and notes, sharing one schema with every
other tenant (tenant_id filter on every row).
"""
from sqlalchemy import Column, String, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship, validates
from datetime import datetime
from notesapp.database import Base
import uuid
import enum


class SubscriptionTier(str, enum.Enum):
    """
    Subscription plans.

    The only allowed transition is FREE -> PRO (see upgrade endpoint).
    There is no downgrade path.
    """
    FREE = "free"
    PRO = "pro"


class Tenant(Base):
    __tablename__ = "tenants"

    # UUIDs avoid enumeration of tenant ids
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    name = Column(String(255), unique=True, nullable=False)
    slug = Column(String(100), unique=True, nullable=False, index=True)

    subscription = Column(
        SQLEnum(SubscriptionTier, values_callable=lambda tiers: [t.value for t in tiers]),
        default=SubscriptionTier.FREE,
        nullable=False
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships
    users = relationship("User", back_populates="tenant", cascade="all, delete-orphan")
    notes = relationship("Note", back_populates="tenant", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Tenant {self.slug}>"

    @validates("slug")
    def normalize_slug(self, key, value):
        return value.strip().lower() if value else value

    @property
    def is_pro(self) -> bool:
        return self.subscription == SubscriptionTier.PRO
