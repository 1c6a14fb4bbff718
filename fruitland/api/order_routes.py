from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_identity
from fruitland.auth.identity import Identity
from fruitland.core.constants import OrderStatus, Role
from fruitland.crud import order as order_crud
from fruitland.db import get_db
from fruitland.schemas.order import CheckoutRequest, OrderRead
from fruitland.utils.tenant import get_hinted_tenant, get_tenant_scope
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


@router.post("", response_model=OrderRead, status_code=201)
async def checkout(
    payload: CheckoutRequest,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Place an order from the caller's cart in the hinted store."""
    return await order_crud.create_order_from_cart(db, payload, identity.id, tenant.id)


@router.get("", response_model=List[OrderRead])
async def list_orders(
    status: Optional[OrderStatus] = None,
    tenant_id: str = Depends(get_tenant_scope),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    if identity.role in (Role.SUPERADMIN, Role.ADMIN):
        return await order_crud.list_orders(db, tenant_id, status=status)
    elif identity.role is Role.DELIVERY_PARTNER:
        return await order_crud.list_orders(db, tenant_id, delivery_partner_id=identity.id, status=status)
    return await order_crud.list_orders(db, tenant_id, user_id=identity.id, status=status)
