from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_identity
from fruitland.auth.identity import Identity
from fruitland.crud import cart as cart_crud
from fruitland.db import get_db
from fruitland.schemas.cart import CartItemCreate, CartItemRead, CartRead
from fruitland.utils.tenant import get_hinted_tenant
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


async def _cart(db: AsyncSession, identity: Identity, tenant: TenantRecord) -> CartRead:
    items = await cart_crud.get_cart_items(db, identity.id, tenant.id)
    return CartRead(
        items=[CartItemRead.model_validate(item) for item in items],
        subtotal=cart_crud.cart_subtotal(items),
    )


@router.get("", response_model=CartRead)
async def get_cart(
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await _cart(db, identity, tenant)


@router.post("", response_model=CartRead)
async def add_to_cart(
    payload: CartItemCreate,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    await cart_crud.add_to_cart(db, payload, identity.id, tenant.id)
    return await _cart(db, identity, tenant)


@router.delete("/{item_id}", response_model=CartRead)
async def remove_cart_item(
    item_id: str,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    await cart_crud.remove_cart_item(db, item_id, identity.id, tenant.id)
    return await _cart(db, identity, tenant)


@router.delete("", response_model=CartRead)
async def clear_cart(
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    await cart_crud.clear_cart(db, identity.id, tenant.id)
    return await _cart(db, identity, tenant)
