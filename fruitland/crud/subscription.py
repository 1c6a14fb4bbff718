import logging
from datetime import date, datetime, timedelta

from dateutil.relativedelta import relativedelta
from fastapi import HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from fruitland.core.constants import DeliveryFrequency, SubscriptionStatus
from fruitland.crud.address import get_address
from fruitland.models.subscription import Subscription, SubscriptionPackage
from fruitland.schemas.subscription import (
    PackageCreate,
    PackageUpdate,
    SubscriptionAction,
    SubscriptionCreate,
)

log = logging.getLogger(__name__)


# -----------------------
# Packages
# -----------------------

async def list_packages(db: AsyncSession, tenant_id: str, active_only: bool = False):
    stmt = select(SubscriptionPackage).where(SubscriptionPackage.tenant_id == tenant_id)
    if active_only:
        stmt = stmt.where(SubscriptionPackage.is_active == True)  # noqa: E712
    result = await db.execute(stmt.order_by(SubscriptionPackage.price.asc()))
    return result.scalars().all()


async def get_package(db: AsyncSession, package_id: str, tenant_id: str) -> SubscriptionPackage:
    result = await db.execute(
        select(SubscriptionPackage).where(
            SubscriptionPackage.id == package_id,
            SubscriptionPackage.tenant_id == tenant_id,
        )
    )
    package = result.scalar_one_or_none()
    if not package:
        raise HTTPException(status_code=404, detail="Subscription package not found")
    return package


async def create_package(db: AsyncSession, data: PackageCreate, tenant_id: str) -> SubscriptionPackage:
    package = SubscriptionPackage(tenant_id=tenant_id, **data.model_dump())
    db.add(package)
    await db.commit()
    await db.refresh(package)
    return package


async def update_package(db: AsyncSession, package_id: str, data: PackageUpdate, tenant_id: str) -> SubscriptionPackage:
    package = await get_package(db, package_id, tenant_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        setattr(package, field, value)
    await db.commit()
    await db.refresh(package)
    return package


# -----------------------
# Subscriptions
# -----------------------

def next_delivery_after(current: date, frequency: DeliveryFrequency) -> date:
    if frequency == DeliveryFrequency.DAILY:
        return current + timedelta(days=1)
    elif frequency == DeliveryFrequency.WEEKLY:
        return current + timedelta(weeks=1)
    elif frequency == DeliveryFrequency.BIWEEKLY:
        return current + timedelta(weeks=2)
    elif frequency == DeliveryFrequency.MONTHLY:
        return current + relativedelta(months=1)
    raise ValueError(f"Unhandled frequency: {frequency!r}")


async def get_subscription(db: AsyncSession, subscription_id: str, user_id: str, tenant_id: str) -> Subscription:
    result = await db.execute(
        select(Subscription)
        .where(
            Subscription.id == subscription_id,
            Subscription.user_id == user_id,
            Subscription.tenant_id == tenant_id,
        )
        .options(selectinload(Subscription.package))
    )
    subscription = result.scalar_one_or_none()
    if not subscription:
        raise HTTPException(status_code=404, detail="Subscription not found")
    return subscription


async def list_subscriptions(db: AsyncSession, user_id: str, tenant_id: str):
    result = await db.execute(
        select(Subscription)
        .where(Subscription.user_id == user_id, Subscription.tenant_id == tenant_id)
        .options(selectinload(Subscription.package))
        .order_by(Subscription.created_at.desc())
    )
    return result.scalars().all()


async def create_subscription(db: AsyncSession, data: SubscriptionCreate, user_id: str, tenant_id: str) -> Subscription:
    package = await get_package(db, data.package_id, tenant_id)
    if not package.is_active:
        raise HTTPException(status_code=400, detail="Subscription package is not available")
    address = await get_address(db, data.address_id, user_id, tenant_id)

    start = data.start_date or date.today()
    subscription = Subscription(
        user_id=user_id,
        tenant_id=tenant_id,
        package_id=package.id,
        address_id=address.id,
        status=SubscriptionStatus.ACTIVE,
        start_date=start,
        next_delivery_date=start,
    )
    db.add(subscription)
    await db.commit()
    log.info("Subscription %s created for user %s in tenant %s", subscription.id, user_id, tenant_id)
    return await get_subscription(db, subscription.id, user_id, tenant_id)


async def apply_action(db: AsyncSession, subscription: Subscription, action: SubscriptionAction) -> Subscription:
    current = subscription.status

    if action.action == "pause" and current == SubscriptionStatus.ACTIVE:
        subscription.status = SubscriptionStatus.PAUSED
        subscription.paused_until = action.paused_until
    elif action.action == "resume" and current == SubscriptionStatus.PAUSED:
        subscription.status = SubscriptionStatus.ACTIVE
        subscription.paused_until = None
        today = date.today()
        upcoming = subscription.next_delivery_date or today
        while upcoming < today:
            upcoming = next_delivery_after(upcoming, subscription.package.frequency)
        subscription.next_delivery_date = upcoming
    elif action.action == "cancel" and current in (SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED):
        subscription.status = SubscriptionStatus.CANCELLED
        subscription.cancelled_at = datetime.utcnow()
        subscription.next_delivery_date = None
    else:
        raise HTTPException(status_code=400, detail=f"Cannot {action.action} a {current.value} subscription")

    await db.commit()
    return subscription
