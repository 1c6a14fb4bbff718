from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_admin
from fruitland.auth.identity import Identity
from fruitland.core.constants import OrderStatus
from fruitland.crud import order as order_crud
from fruitland.db import get_db
from fruitland.schemas.order import OrderAssign, OrderRead, OrderStatusUpdate
from fruitland.utils.tenant import get_tenant_scope

router = APIRouter()


@router.get("", response_model=List[OrderRead])
async def list_orders(
    status: Optional[OrderStatus] = None,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await order_crud.list_orders(db, tenant_id, status=status)


@router.patch("/{order_id}", response_model=OrderRead)
async def update_order(
    order_id: str,
    payload: OrderStatusUpdate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    order = await order_crud.get_order(db, order_id, tenant_id)
    return await order_crud.update_order_status(
        db, order, status=payload.status, payment_status=payload.payment_status
    )


@router.post("/{order_id}/assign", response_model=OrderRead)
async def assign_order(
    order_id: str,
    payload: OrderAssign,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    order = await order_crud.get_order(db, order_id, tenant_id)
    return await order_crud.assign_delivery_partner(db, order, payload.delivery_partner_id)
