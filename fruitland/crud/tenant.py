import logging

from fastapi import HTTPException
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.models.order import Order
from fruitland.models.product import Product
from fruitland.models.subscription import Subscription
from fruitland.models.tenant import Tenant
from fruitland.models.user import User
from fruitland.schemas.tenant import TenantCreate, TenantUpdate
from fruitland.utils.tenant_directory import tenant_directory

log = logging.getLogger(__name__)


async def get_tenant(db: AsyncSession, tenant_id: str) -> Tenant:
    result = await db.execute(select(Tenant).where(Tenant.id == tenant_id))
    tenant = result.scalar_one_or_none()
    if not tenant:
        raise HTTPException(status_code=404, detail="Tenant not found")
    return tenant


async def list_active_tenants(db: AsyncSession):
    result = await db.execute(
        select(Tenant).where(Tenant.is_active == True).order_by(Tenant.name.asc())  # noqa: E712
    )
    return result.scalars().all()


async def list_tenants_with_stats(db: AsyncSession):
    def _count(model):
        return (
            select(func.count(model.id))
            .where(model.tenant_id == Tenant.id)
            .correlate(Tenant)
            .scalar_subquery()
        )

    result = await db.execute(
        select(
            Tenant,
            _count(User).label("user_count"),
            _count(Product).label("product_count"),
            _count(Order).label("order_count"),
            _count(Subscription).label("subscription_count"),
        ).order_by(Tenant.created_at.desc())
    )

    rows = []
    for tenant, users, products, orders, subscriptions in result.all():
        rows.append({
            "tenant": tenant,
            "user_count": users,
            "product_count": products,
            "order_count": orders,
            "subscription_count": subscriptions,
        })
    return rows


async def _ensure_unique(db: AsyncSession, field, value, exclude_id=None):
    if not value:
        return
    stmt = select(Tenant.id).where(field == value)
    if exclude_id:
        stmt = stmt.where(Tenant.id != exclude_id)
    existing = await db.execute(stmt)
    if existing.first() is not None:
        raise HTTPException(status_code=400, detail=f"Tenant {field.key} already in use")


async def create_tenant(db: AsyncSession, data: TenantCreate) -> Tenant:
    if not data.name or not data.name.strip():
        raise HTTPException(status_code=400, detail="Tenant name is required")

    await _ensure_unique(db, Tenant.slug, data.slug)
    await _ensure_unique(db, Tenant.domain, data.domain)

    tenant = Tenant(**data.model_dump())
    db.add(tenant)
    await db.commit()
    await db.refresh(tenant)
    log.info("Created tenant %s (%s)", tenant.id, tenant.slug)
    return tenant


async def update_tenant(db: AsyncSession, tenant_id: str, data: TenantUpdate) -> Tenant:
    tenant = await get_tenant(db, tenant_id)
    old_slug = tenant.slug
    updates = data.model_dump(exclude_unset=True)

    if "name" in updates and not (updates["name"] or "").strip():
        raise HTTPException(status_code=400, detail="Tenant name is required")
    if "slug" in updates:
        await _ensure_unique(db, Tenant.slug, updates["slug"], exclude_id=tenant.id)
    if "domain" in updates:
        await _ensure_unique(db, Tenant.domain, updates["domain"], exclude_id=tenant.id)

    for field, value in updates.items():
        setattr(tenant, field, value)
    await db.commit()
    await db.refresh(tenant)

    tenant_directory.invalidate(slug=old_slug, tenant_id=tenant.id)
    if tenant.slug != old_slug:
        tenant_directory.invalidate(slug=tenant.slug)
    log.info("Updated tenant %s", tenant.id)
    return tenant
