import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import case, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.auth.security import hash_password, verify_password
from fruitland.core.constants import CLOSED_ORDER_STATUSES, Role
from fruitland.models.order import Order
from fruitland.models.tenant import Tenant
from fruitland.models.user import User
from fruitland.models.user_tenant import UserTenant
from fruitland.schemas.user import RegisterRequest, StaffCreate
from fruitland.utils.membership import provision_membership

log = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def authenticate(db: AsyncSession, email: str, password: str, tenant_slug: Optional[str] = None) -> User:
    stmt = select(User).where(func.lower(User.email) == email.lower())
    if tenant_slug:
        stmt = stmt.join(Tenant, User.tenant_id == Tenant.id).where(Tenant.slug == tenant_slug)

    result = await db.execute(stmt)
    users = result.scalars().all()

    if not tenant_slug:
        # Platform accounts sign in without a store
        platform = [u for u in users if u.tenant_id is None]
        if platform:
            users = platform

    if len(users) > 1:
        raise HTTPException(status_code=400, detail="Account exists in several stores, tenant_slug is required")
    user = users[0] if users else None

    if not user or not verify_password(password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")
    if not user.is_active:
        raise HTTPException(status_code=403, detail="Account is disabled")
    return user


async def _email_taken(db: AsyncSession, email: str, tenant_id: Optional[str]) -> bool:
    stmt = select(User.id).where(func.lower(User.email) == email.lower())
    if tenant_id is None:
        stmt = stmt.where(User.tenant_id.is_(None))
    else:
        stmt = stmt.where(User.tenant_id == tenant_id)
    result = await db.execute(stmt)
    return result.first() is not None


async def register_customer(db: AsyncSession, data: RegisterRequest, tenant_id: str) -> User:
    if await _email_taken(db, data.email, tenant_id):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        email=data.email.lower(),
        name=data.name,
        phone=data.phone,
        hashed_password=hash_password(data.password),
        role=Role.CUSTOMER.value,
        tenant_id=tenant_id,
    )
    db.add(user)
    await db.flush()
    db.add(UserTenant(user_id=user.id, tenant_id=tenant_id, role=Role.CUSTOMER.value))
    await db.commit()
    await db.refresh(user)
    log.info("Registered customer %s in tenant %s", user.id, tenant_id)
    return user


async def create_staff_user(db: AsyncSession, data: StaffCreate, tenant_id: str) -> User:
    if data.role not in (Role.ADMIN, Role.DELIVERY_PARTNER):
        raise HTTPException(status_code=400, detail="Only ADMIN or DELIVERY_PARTNER accounts can be created here")
    if await _email_taken(db, data.email, tenant_id):
        raise HTTPException(status_code=400, detail="Email already registered")

    user = User(
        email=data.email.lower(),
        name=data.name,
        phone=data.phone,
        hashed_password=hash_password(data.password),
        role=data.role.value,
        tenant_id=tenant_id,
    )
    db.add(user)
    await db.flush()
    provision_membership(db, user.id, tenant_id, data.role)
    await db.commit()
    await db.refresh(user)
    log.info("Provisioned %s %s in tenant %s", data.role.value, user.id, tenant_id)
    return user


async def ensure_superadmin(db: AsyncSession, email: str, password: str) -> User:
    result = await db.execute(
        select(User).where(func.lower(User.email) == email.lower(), User.role == Role.SUPERADMIN.value)
    )
    user = result.scalar_one_or_none()
    if user:
        return user

    user = User(
        email=email.lower(),
        name="Super Admin",
        hashed_password=hash_password(password),
        role=Role.SUPERADMIN.value,
        tenant_id=None,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    log.info("Seeded superadmin %s", user.email)
    return user


async def list_tenant_users(db: AsyncSession, tenant_id: str, role: Optional[Role] = None):
    stmt = select(User).where(User.tenant_id == tenant_id)
    if role is not None:
        stmt = stmt.where(User.role == Role(role).value)
    result = await db.execute(stmt.order_by(User.created_at.desc()))
    return result.scalars().all()


async def list_delivery_agents(db: AsyncSession, tenant_id: str):
    closed = [s for s in CLOSED_ORDER_STATUSES]
    result = await db.execute(
        select(
            User,
            func.count(Order.id).label("total_orders"),
            func.coalesce(
                func.sum(case((Order.status.notin_(closed), 1), else_=0)), 0
            ).label("active_orders"),
        )
        .outerjoin(Order, (Order.delivery_partner_id == User.id) & (Order.tenant_id == tenant_id))
        .where(User.tenant_id == tenant_id, User.role == Role.DELIVERY_PARTNER.value)
        .group_by(User.id)
        .order_by(User.name.asc())
    )
    return [
        {"user": user, "total_orders": total, "active_orders": int(active)}
        for user, total, active in result.all()
    ]


async def has_membership(db: AsyncSession, user_id: str, tenant_id: str) -> bool:
    result = await db.execute(
        select(UserTenant.id).where(UserTenant.user_id == user_id, UserTenant.tenant_id == tenant_id)
    )
    return result.first() is not None
