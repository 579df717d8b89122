"""
Tenant Endpoints

RBAC:
- View own tenant and usage: any authenticated user
- Upgrade plan: admin of that tenant only

The upgrade route is addressed by slug. The slug must resolve to the
caller's own tenant; another tenant's slug is a 403, not a 404.
"""
from fastapi import APIRouter, Depends

from notesapp.api.deps import get_admin_scope, get_tenant_scope
from notesapp.core.quota import note_limit_for
from notesapp.core.scoping import TenantScope
from notesapp.models.tenant import SubscriptionTier
from notesapp.schemas.tenant import TenantSummary, TenantUsageResponse, UpgradeResponse
from notesapp.utils.logging import get_logger, log_security_event

logger = get_logger(__name__)

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("/current", response_model=TenantUsageResponse)
def get_current_tenant(scope: TenantScope = Depends(get_tenant_scope)):
    """Caller's tenant with note usage against the plan limit."""
    tenant = scope.principal.tenant
    return TenantUsageResponse(
        id=tenant.id,
        slug=tenant.slug,
        name=tenant.name,
        subscription=tenant.subscription,
        note_count=scope.note_count(),
        note_limit=note_limit_for(tenant),
    )


@router.post("/{slug}/upgrade", response_model=UpgradeResponse)
def upgrade_tenant(slug: str, scope: TenantScope = Depends(get_admin_scope)):
    """
    Upgrade the tenant to the pro plan.

    One-way: there is no downgrade. Upgrading a pro tenant is a no-op.
    """
    tenant = scope.tenant_by_slug(slug)

    if tenant.is_pro:
        return UpgradeResponse(
            message="Tenant is already on the Pro plan",
            tenant=TenantSummary.model_validate(tenant),
        )

    tenant = scope.repository.update_tenant_subscription(tenant, SubscriptionTier.PRO)

    log_security_event(
        "tenant_upgraded",
        {"tenant_id": tenant.id, "user_id": scope.principal.user_id},
        logger
    )

    return UpgradeResponse(
        message="Tenant upgraded to Pro successfully",
        tenant=TenantSummary.model_validate(tenant),
    )
