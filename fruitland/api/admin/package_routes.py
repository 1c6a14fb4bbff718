from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_admin
from fruitland.auth.identity import Identity
from fruitland.crud import subscription as subscription_crud
from fruitland.db import get_db
from fruitland.schemas.subscription import PackageCreate, PackageRead, PackageUpdate
from fruitland.utils.tenant import get_tenant_scope

router = APIRouter()


@router.get("", response_model=List[PackageRead])
async def list_packages(
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_crud.list_packages(db, tenant_id)


@router.post("", response_model=PackageRead, status_code=201)
async def create_package(
    payload: PackageCreate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_crud.create_package(db, payload, tenant_id)


@router.patch("/{package_id}", response_model=PackageRead)
async def update_package(
    package_id: str,
    payload: PackageUpdate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_crud.update_package(db, package_id, payload, tenant_id)
