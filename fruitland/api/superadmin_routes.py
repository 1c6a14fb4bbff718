from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_superadmin
from fruitland.auth.identity import Identity
from fruitland.crud import tenant as tenant_crud
from fruitland.db import get_db
from fruitland.schemas.tenant import TenantCreate, TenantRead, TenantStats, TenantUpdate

router = APIRouter()


@router.get("/tenants", response_model=List[TenantStats])
async def list_tenants_with_stats(
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_superadmin),
):
    """Every tenant, active or not, with usage counts."""
    rows = await tenant_crud.list_tenants_with_stats(db)
    return [
        TenantStats(
            **TenantRead.model_validate(row["tenant"]).model_dump(),
            user_count=row["user_count"],
            product_count=row["product_count"],
            order_count=row["order_count"],
            subscription_count=row["subscription_count"],
        )
        for row in rows
    ]


@router.post("/tenants", response_model=TenantRead, status_code=201)
async def create_tenant(
    payload: TenantCreate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_superadmin),
):
    return await tenant_crud.create_tenant(db, payload)


@router.patch("/tenants/{tenant_id}", response_model=TenantRead)
async def update_tenant(
    tenant_id: str,
    payload: TenantUpdate,
    db: AsyncSession = Depends(get_db),
    identity: Identity = Depends(get_current_superadmin),
):
    return await tenant_crud.update_tenant(db, tenant_id, payload)
