from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_admin
from fruitland.auth.identity import Identity
from fruitland.crud import warehouse as warehouse_crud
from fruitland.db import get_db
from fruitland.schemas.warehouse import (
    ProductStockRead,
    StockSet,
    WarehouseCreate,
    WarehouseRead,
    WarehouseUpdate,
)
from fruitland.utils.tenant import get_tenant_scope

router = APIRouter()


@router.get("", response_model=List[WarehouseRead])
async def list_warehouses(
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await warehouse_crud.list_warehouses(db, tenant_id)


@router.post("", response_model=WarehouseRead, status_code=201)
async def create_warehouse(
    payload: WarehouseCreate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await warehouse_crud.create_warehouse(db, payload, tenant_id)


@router.get("/{warehouse_id}", response_model=WarehouseRead)
async def get_warehouse(
    warehouse_id: str,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await warehouse_crud.get_warehouse(db, warehouse_id, tenant_id)


@router.patch("/{warehouse_id}", response_model=WarehouseRead)
async def update_warehouse(
    warehouse_id: str,
    payload: WarehouseUpdate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await warehouse_crud.update_warehouse(db, warehouse_id, payload, tenant_id)


@router.delete("/{warehouse_id}")
async def delete_warehouse(
    warehouse_id: str,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    await warehouse_crud.delete_warehouse(db, warehouse_id, tenant_id)
    return {"success": True}


@router.put("/{warehouse_id}/stock", response_model=ProductStockRead)
async def set_stock(
    warehouse_id: str,
    payload: StockSet,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await warehouse_crud.set_stock(db, warehouse_id, payload.product_id, payload.quantity, tenant_id)
