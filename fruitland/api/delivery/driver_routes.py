"""
Delivery partner endpoints.

A partner works inside the tenant named by the request hint and must hold a
provisioned membership there.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_delivery_partner
from fruitland.auth.identity import Identity
from fruitland.crud import order as order_crud
from fruitland.crud import user as user_crud
from fruitland.db import get_db
from fruitland.schemas.order import DeliveryStatusUpdate, OrderRead
from fruitland.utils.tenant import get_hinted_tenant
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


async def get_partner_tenant(
    identity: Identity = Depends(get_current_delivery_partner),
    tenant: TenantRecord = Depends(get_hinted_tenant),
    db: AsyncSession = Depends(get_db),
) -> TenantRecord:
    if not await user_crud.has_membership(db, identity.id, tenant.id):
        raise HTTPException(status_code=403, detail="Delivery partner is not associated with this tenant")
    return tenant


@router.get("/orders", response_model=List[OrderRead])
async def my_orders(
    tenant: TenantRecord = Depends(get_partner_tenant),
    identity: Identity = Depends(get_current_delivery_partner),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.list_orders(db, tenant.id, delivery_partner_id=identity.id)


@router.patch("/orders/{order_id}", response_model=OrderRead)
async def update_delivery(
    order_id: str,
    payload: DeliveryStatusUpdate,
    tenant: TenantRecord = Depends(get_partner_tenant),
    identity: Identity = Depends(get_current_delivery_partner),
    db: AsyncSession = Depends(get_db),
):
    order = await order_crud.get_order(db, order_id, tenant.id)
    if order.delivery_partner_id != identity.id:
        raise HTTPException(status_code=404, detail="Order not found")
    return await order_crud.update_delivery_status(db, order, payload.status)
