from typing import List

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_superadmin
from fruitland.auth.identity import SESSION_ACTIVE_TENANT_ID, Identity
from fruitland.core.errors import TenantNotFound
from fruitland.crud import tenant as tenant_crud
from fruitland.db import get_db
from fruitland.schemas.tenant import SetActiveTenant, TenantRead
from fruitland.utils.tenant import get_storefront_tenant
from fruitland.utils.tenant_directory import TenantRecord, tenant_directory

router = APIRouter()


@router.get("/tenants", response_model=List[TenantRead])
async def list_tenants(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_superadmin),
):
    """Active tenants for the superadmin tenant selector."""
    return await tenant_crud.list_active_tenants(db)


@router.get("/tenants/{tenant_slug}", response_model=TenantRead)
async def get_tenant_by_slug(tenant: TenantRecord = Depends(get_storefront_tenant)):
    return tenant


@router.post("/tenant/set-active")
async def set_active_tenant(
    payload: SetActiveTenant,
    request: Request,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_superadmin),
):
    if payload.tenant_id is None:
        request.session.pop(SESSION_ACTIVE_TENANT_ID, None)
        return {"success": True, "tenant": None}

    tenant = await tenant_directory.lookup_by_id(db, payload.tenant_id)
    if tenant is None:
        raise TenantNotFound()

    request.session[SESSION_ACTIVE_TENANT_ID] = tenant.id
    return {"success": True, "tenant": TenantRead.model_validate(tenant)}
