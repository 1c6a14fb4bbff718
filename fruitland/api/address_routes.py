from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_identity
from fruitland.auth.identity import Identity
from fruitland.crud import address as address_crud
from fruitland.db import get_db
from fruitland.schemas.address import AddressCreate, AddressRead
from fruitland.utils.tenant import get_hinted_tenant
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


@router.get("", response_model=List[AddressRead])
async def list_addresses(
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await address_crud.list_addresses(db, identity.id, tenant.id)


@router.post("", response_model=AddressRead, status_code=201)
async def create_address(
    payload: AddressCreate,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await address_crud.create_address(db, payload, identity.id, tenant.id)


@router.delete("/{address_id}")
async def delete_address(
    address_id: str,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    await address_crud.delete_address(db, address_id, identity.id, tenant.id)
    return {"success": True}
