"""
Demo Data

Two free-tier tenants (Acme, Globex), each with an admin and a member.
All demo users share the password ``password``.
"""
from typing import Any, Dict

from sqlalchemy.orm import Session

from notesapp.core.security import get_password_hash
from notesapp.models import Note, SubscriptionTier, Tenant, User, UserRole
from notesapp.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PASSWORD = "password"

DEMO_TENANTS = [
    {"slug": "acme", "name": "Acme"},
    {"slug": "globex", "name": "Globex"},
]

DEMO_USERS = [
    {"email": "admin@acme.test", "role": UserRole.ADMIN, "tenant": "acme"},
    {"email": "user@acme.test", "role": UserRole.MEMBER, "tenant": "acme"},
    {"email": "admin@globex.test", "role": UserRole.ADMIN, "tenant": "globex"},
    {"email": "user@globex.test", "role": UserRole.MEMBER, "tenant": "globex"},
]


def seed_demo_data(db: Session) -> Dict[str, Any]:
    """
    Replace all data with the demo tenants and users.

    Returns a summary of what was deleted and created.
    """
    deleted = {
        "notes": db.query(Note).delete(),
        "users": db.query(User).delete(),
        "tenants": db.query(Tenant).delete(),
    }
    db.flush()
    logger.info(
        f"Cleared existing data: {deleted['notes']} notes, "
        f"{deleted['users']} users, {deleted['tenants']} tenants"
    )

    tenants = {}
    for entry in DEMO_TENANTS:
        tenant = Tenant(slug=entry["slug"], name=entry["name"], subscription=SubscriptionTier.FREE)
        db.add(tenant)
        tenants[entry["slug"]] = tenant
    db.flush()

    users = []
    for entry in DEMO_USERS:
        user = User(
            email=entry["email"],
            hashed_password=get_password_hash(DEMO_PASSWORD),
            role=entry["role"],
            tenant_id=tenants[entry["tenant"]].id,
        )
        db.add(user)
        users.append(user)

    db.commit()
    logger.info(f"Seeded {len(tenants)} tenants and {len(users)} users")

    return {
        "tenants": [
            {
                "id": tenant.id,
                "slug": tenant.slug,
                "name": tenant.name,
                "subscription": tenant.subscription.value,
            }
            for tenant in tenants.values()
        ],
        "users": [
            {"email": user.email, "role": user.role.value, "tenant": user.tenant_id}
            for user in users
        ],
        "deleted_counts": deleted,
    }
