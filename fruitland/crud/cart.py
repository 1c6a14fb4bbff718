from decimal import Decimal

from fastapi import HTTPException
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from fruitland.core.errors import InsufficientStock, OrderError
from fruitland.models.cart import CartItem
from fruitland.schemas.cart import CartItemCreate
from fruitland.crud.product import get_product


async def get_cart_items(db: AsyncSession, user_id: str, tenant_id: str):
    result = await db.execute(
        select(CartItem)
        .where(CartItem.user_id == user_id, CartItem.tenant_id == tenant_id)
        .options(selectinload(CartItem.product))
        .order_by(CartItem.created_at.asc())
    )
    return result.scalars().all()


def cart_subtotal(items) -> Decimal:
    return sum((Decimal(item.product.price) * item.quantity for item in items), Decimal("0"))


async def add_to_cart(db: AsyncSession, data: CartItemCreate, user_id: str, tenant_id: str) -> CartItem:
    # Product must belong to the cart's tenant
    product = await get_product(db, data.product_id, tenant_id)
    if not product.is_available:
        raise OrderError(f"{product.name} is not available")

    result = await db.execute(
        select(CartItem).where(
            CartItem.user_id == user_id,
            CartItem.tenant_id == tenant_id,
            CartItem.product_id == product.id,
        )
    )
    item = result.scalar_one_or_none()

    quantity = data.quantity + (item.quantity if item else 0)
    if quantity > product.stock:
        raise InsufficientStock(f"Only {product.stock} of {product.name} in stock")

    if item:
        item.quantity = quantity
    else:
        item = CartItem(user_id=user_id, tenant_id=tenant_id, product_id=product.id, quantity=quantity)
        db.add(item)
    await db.commit()
    return item


async def remove_cart_item(db: AsyncSession, item_id: str, user_id: str, tenant_id: str) -> None:
    result = await db.execute(
        select(CartItem).where(
            CartItem.id == item_id,
            CartItem.user_id == user_id,
            CartItem.tenant_id == tenant_id,
        )
    )
    item = result.scalar_one_or_none()
    if not item:
        raise HTTPException(status_code=404, detail="Cart item not found")
    await db.delete(item)
    await db.commit()


async def clear_cart(db: AsyncSession, user_id: str, tenant_id: str, commit: bool = True) -> None:
    await db.execute(
        delete(CartItem).where(CartItem.user_id == user_id, CartItem.tenant_id == tenant_id)
    )
    if commit:
        await db.commit()
