import logging
from typing import Dict, List, Optional, Tuple

from fastapi import HTTPException
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from fruitland.core.errors import InsufficientStock
from fruitland.models.order import Order
from fruitland.models.product import Product
from fruitland.models.warehouse import ProductStock, Warehouse
from fruitland.schemas.warehouse import WarehouseCreate, WarehouseUpdate

log = logging.getLogger(__name__)


async def list_warehouses(db: AsyncSession, tenant_id: str):
    result = await db.execute(
        select(Warehouse)
        .where(Warehouse.tenant_id == tenant_id)
        .options(selectinload(Warehouse.product_stocks))
        .order_by(Warehouse.created_at.asc())
    )
    return result.scalars().all()


async def get_warehouse(db: AsyncSession, warehouse_id: str, tenant_id: str) -> Warehouse:
    result = await db.execute(
        select(Warehouse)
        .where(Warehouse.id == warehouse_id, Warehouse.tenant_id == tenant_id)
        .options(selectinload(Warehouse.product_stocks))
    )
    warehouse = result.scalar_one_or_none()
    if not warehouse:
        raise HTTPException(status_code=404, detail="Warehouse not found")
    return warehouse


async def create_warehouse(db: AsyncSession, data: WarehouseCreate, tenant_id: str) -> Warehouse:
    warehouse = Warehouse(tenant_id=tenant_id, **data.model_dump())
    db.add(warehouse)
    await db.commit()
    return await get_warehouse(db, warehouse.id, tenant_id)


async def update_warehouse(db: AsyncSession, warehouse_id: str, data: WarehouseUpdate, tenant_id: str) -> Warehouse:
    warehouse = await get_warehouse(db, warehouse_id, tenant_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(warehouse, field, value)
    await db.commit()
    return await get_warehouse(db, warehouse_id, tenant_id)


async def delete_warehouse(db: AsyncSession, warehouse_id: str, tenant_id: str) -> None:
    warehouse = await get_warehouse(db, warehouse_id, tenant_id)
    in_use = await db.execute(select(Order.id).where(Order.warehouse_id == warehouse.id).limit(1))
    if in_use.first() is not None:
        raise HTTPException(status_code=400, detail="Warehouse has orders and cannot be deleted")
    await db.delete(warehouse)
    await db.commit()


async def set_stock(db: AsyncSession, warehouse_id: str, product_id: str, quantity: int, tenant_id: str) -> ProductStock:
    warehouse = await get_warehouse(db, warehouse_id, tenant_id)

    product = await db.execute(
        select(Product.id).where(Product.id == product_id, Product.tenant_id == tenant_id)
    )
    if product.first() is None:
        raise HTTPException(status_code=404, detail="Product not found")

    stock = next((s for s in warehouse.product_stocks if s.product_id == product_id), None)
    if stock is None:
        stock = ProductStock(warehouse_id=warehouse.id, product_id=product_id, quantity=quantity)
        db.add(stock)
    else:
        stock.quantity = quantity
    await db.commit()
    return stock


def _can_fulfil(stocks: Dict[str, ProductStock], lines: List[Tuple[str, int]]) -> bool:
    for product_id, quantity in lines:
        stock = stocks.get(product_id)
        if stock is None or stock.quantity < quantity:
            return False
    return True


async def allocate_stock(
    db: AsyncSession,
    tenant_id: str,
    lines: List[Tuple[str, int]],
    pincode: Optional[str] = None,
) -> Optional[Warehouse]:
    """
    Pick the warehouse that ships an order and decrement its stock rows.

    Warehouses whose pincode matches the delivery address are tried first,
    then the rest by creation time. Returns None when the tenant has no
    active warehouse. Caller commits.
    """
    warehouses = await db.execute(
        select(Warehouse)
        .where(Warehouse.tenant_id == tenant_id, Warehouse.is_active == True)  # noqa: E712
        .options(selectinload(Warehouse.product_stocks))
        .order_by(Warehouse.created_at.asc(), Warehouse.id.asc())
    )
    candidates = list(warehouses.scalars().all())
    if not candidates:
        return None

    candidates.sort(key=lambda w: 0 if pincode and w.pincode == pincode else 1)

    for warehouse in candidates:
        stocks = {s.product_id: s for s in warehouse.product_stocks}
        if _can_fulfil(stocks, lines) and await _take_stock(db, warehouse.id, lines):
            log.info("Allocated order lines to warehouse %s (tenant %s)", warehouse.id, tenant_id)
            return warehouse

    raise InsufficientStock("No warehouse can fulfil this order")


async def _take_stock(db: AsyncSession, warehouse_id: str, lines: List[Tuple[str, int]]) -> bool:
    """
    Decrement every line in one warehouse, or none of them.

    A row is only decremented while it still holds enough stock.
    """
    taken = []
    for product_id, quantity in lines:
        result = await db.execute(
            update(ProductStock)
            .where(
                ProductStock.warehouse_id == warehouse_id,
                ProductStock.product_id == product_id,
                ProductStock.quantity >= quantity,
            )
            .values(quantity=ProductStock.quantity - quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            log.info("Warehouse %s ran out of %s during allocation", warehouse_id, product_id)
            await restore_stock(db, warehouse_id, taken)
            return False
        taken.append((product_id, quantity))
    return True


async def restore_stock(db: AsyncSession, warehouse_id: str, lines: List[Tuple[str, int]]) -> None:
    for product_id, quantity in lines:
        result = await db.execute(
            update(ProductStock)
            .where(ProductStock.warehouse_id == warehouse_id, ProductStock.product_id == product_id)
            .values(quantity=ProductStock.quantity + quantity)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            db.add(ProductStock(warehouse_id=warehouse_id, product_id=product_id, quantity=quantity))
