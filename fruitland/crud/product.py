from typing import Optional

from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.models.product import Product
from fruitland.schemas.product import ProductCreate, ProductUpdate


async def list_products(
    db: AsyncSession,
    tenant_id: str,
    category: Optional[str] = None,
    available: Optional[bool] = None,
):
    stmt = select(Product).where(Product.tenant_id == tenant_id)
    if category:
        stmt = stmt.where(Product.category == category)
    if available is not None:
        stmt = stmt.where(Product.is_available == available)
    result = await db.execute(stmt.order_by(Product.created_at.desc()))
    return result.scalars().all()


async def get_product(db: AsyncSession, product_id: str, tenant_id: Optional[str] = None) -> Product:
    stmt = select(Product).where(Product.id == product_id)
    if tenant_id is not None:
        stmt = stmt.where(Product.tenant_id == tenant_id)
    result = await db.execute(stmt)
    product = result.scalar_one_or_none()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


async def create_product(db: AsyncSession, data: ProductCreate, tenant_id: str) -> Product:
    product = Product(tenant_id=tenant_id, **data.model_dump())
    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product


async def update_product(db: AsyncSession, product: Product, data: ProductUpdate) -> Product:
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(product, field, value)
    await db.commit()
    await db.refresh(product)
    return product


async def delete_product(db: AsyncSession, product: Product) -> None:
    await db.delete(product)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=400,
            detail="Product appears in orders and cannot be deleted; mark it unavailable instead",
        )
