import logging
import secrets
import string
import time
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from fruitland.core.constants import CLOSED_ORDER_STATUSES, OrderStatus, PaymentStatus, Role
from fruitland.core.errors import InsufficientStock, OrderError
from fruitland.crud import loyalty as loyalty_crud
from fruitland.crud.address import get_address
from fruitland.crud.cart import clear_cart, get_cart_items
from fruitland.crud.warehouse import allocate_stock, restore_stock
from fruitland.models.order import Order, OrderItem
from fruitland.models.product import Product
from fruitland.models.user import User
from fruitland.schemas.order import CheckoutRequest

log = logging.getLogger(__name__)

_ORDER_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_order_number() -> str:
    suffix = "".join(secrets.choice(_ORDER_SUFFIX_ALPHABET) for _ in range(9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


async def get_order(db: AsyncSession, order_id: str, tenant_id: Optional[str] = None) -> Order:
    stmt = select(Order).where(Order.id == order_id).options(selectinload(Order.items))
    if tenant_id is not None:
        stmt = stmt.where(Order.tenant_id == tenant_id)
    result = await db.execute(stmt)
    order = result.scalar_one_or_none()
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


async def list_orders(
    db: AsyncSession,
    tenant_id: str,
    user_id: Optional[str] = None,
    status: Optional[OrderStatus] = None,
    delivery_partner_id: Optional[str] = None,
):
    stmt = (
        select(Order)
        .where(Order.tenant_id == tenant_id)
        .options(selectinload(Order.items))
        .order_by(Order.created_at.desc())
    )
    if user_id:
        stmt = stmt.where(Order.user_id == user_id)
    if delivery_partner_id:
        stmt = stmt.where(Order.delivery_partner_id == delivery_partner_id)
    if status:
        stmt = stmt.where(Order.status == status)
    result = await db.execute(stmt)
    return result.scalars().all()


async def create_order_from_cart(
    db: AsyncSession,
    data: CheckoutRequest,
    user_id: str,
    tenant_id: str,
) -> Order:
    """
    Turn the caller's cart in ``tenant_id`` into an order.

    Everything happens in one transaction: a rejected checkout leaves stock,
    loyalty balance and cart untouched.
    """
    items = await get_cart_items(db, user_id, tenant_id)
    if not items:
        raise OrderError("Cart is empty")

    address = await get_address(db, data.address_id, user_id, tenant_id)

    subtotal = Decimal("0")
    lines = []
    for item in items:
        product = item.product
        if product.tenant_id != tenant_id or not product.is_available:
            raise OrderError(f"{product.name} is not available")
        if product.stock < item.quantity:
            raise InsufficientStock(f"Insufficient stock for {product.name}")
        subtotal += Decimal(product.price) * item.quantity
        lines.append((product.id, item.quantity))

    try:
        for item in items:
            await _take_product_stock(db, item.product, item.quantity)
        warehouse = await allocate_stock(db, tenant_id, lines, address.pincode)
    except OrderError:
        await db.rollback()
        raise

    points = 0
    if data.redeem_points:
        balance = await loyalty_crud.get_balance(db, user_id, tenant_id)
        points = loyalty_crud.redeemable_points(data.redeem_points, balance, subtotal)
    discount = loyalty_crud.points_value(points)

    order = Order(
        order_number=generate_order_number(),
        user_id=user_id,
        tenant_id=tenant_id,
        address_id=address.id,
        warehouse_id=warehouse.id if warehouse else None,
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
        subtotal=subtotal,
        discount=discount,
        total_amount=subtotal - discount,
        points_redeemed=points,
    )
    order.items = [
        OrderItem(
            product_id=item.product.id,
            quantity=item.quantity,
            price=item.product.price,
            product_name=item.product.name,
        )
        for item in items
    ]
    db.add(order)
    await db.flush()

    if points:
        loyalty_crud.record_redemption(db, order, points)

    await clear_cart(db, user_id, tenant_id, commit=False)
    await db.commit()
    log.info("Order %s placed in tenant %s (%d lines)", order.order_number, tenant_id, len(lines))
    return await get_order(db, order.id, tenant_id)


async def _take_product_stock(db: AsyncSession, product: Product, quantity: int) -> None:
    # The stock check and the decrement are one statement
    result = await db.execute(
        update(Product)
        .where(Product.id == product.id, Product.stock >= quantity)
        .values(stock=Product.stock - quantity)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise InsufficientStock(f"Insufficient stock for {product.name}")


async def _restock(db: AsyncSession, order: Order) -> None:
    lines = [(item.product_id, item.quantity) for item in order.items]
    for product_id, quantity in lines:
        await db.execute(
            update(Product)
            .where(Product.id == product_id)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
    if order.warehouse_id:
        await restore_stock(db, order.warehouse_id, lines)


async def update_order_status(
    db: AsyncSession,
    order: Order,
    status: Optional[OrderStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
) -> Order:
    if status is not None and status != order.status:
        if order.status in CLOSED_ORDER_STATUSES:
            raise OrderError(f"Order is already {order.status.value}")

        if status == OrderStatus.CANCELLED:
            await _restock(db, order)
            loyalty_crud.refund_redemption(db, order)
        elif status == OrderStatus.DELIVERED:
            order.delivered_at = datetime.utcnow()
            await loyalty_crud.award_points(db, order)

        log.info("Order %s: %s -> %s", order.order_number, order.status.value, status.value)
        order.status = status

    if payment_status is not None:
        order.payment_status = payment_status

    await db.commit()
    return await get_order(db, order.id)


async def assign_delivery_partner(db: AsyncSession, order: Order, partner_id: str) -> Order:
    if order.status in CLOSED_ORDER_STATUSES:
        raise OrderError(f"Order is already {order.status.value}")

    result = await db.execute(
        select(User).where(
            User.id == partner_id,
            User.tenant_id == order.tenant_id,
            User.role == Role.DELIVERY_PARTNER.value,
            User.is_active == True,  # noqa: E712
        )
    )
    if result.scalar_one_or_none() is None:
        raise OrderError("Delivery partner not found in this tenant", status_code=404)

    order.delivery_partner_id = partner_id
    await db.commit()
    return await get_order(db, order.id)


DELIVERY_PARTNER_TRANSITIONS = {
    OrderStatus.OUT_FOR_DELIVERY: (OrderStatus.CONFIRMED, OrderStatus.PROCESSING, OrderStatus.PENDING),
    OrderStatus.DELIVERED: (OrderStatus.OUT_FOR_DELIVERY,),
}


async def update_delivery_status(db: AsyncSession, order: Order, status: OrderStatus) -> Order:
    allowed_from = DELIVERY_PARTNER_TRANSITIONS.get(status)
    if allowed_from is None:
        raise OrderError("Delivery partners can only mark orders OUT_FOR_DELIVERY or DELIVERED")
    if order.status not in allowed_from:
        raise OrderError(f"Cannot move order from {order.status.value} to {status.value}")
    return await update_order_status(db, order, status=status)
