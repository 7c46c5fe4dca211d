# storefront/api/v1/routers/tenant.py
from fastapi import APIRouter
from storefront.api.deps import TenantDep
from storefront.core.tenant_config import resolve_tenant_config

import logging
logger = logging.getLogger(__name__)

router = APIRouter(tags=["tenant"])


@router.get("/tenant")
async def get_tenant_config(tenant: TenantDep):
    """Resolved tenant id and its merged configuration bundle."""
    config = resolve_tenant_config(tenant)
    logger.info("Request: tenant_config tenant=%s config_id=%s", tenant, config.id)
    return {"tenant": tenant, "config": config.model_dump(by_alias=True)}
