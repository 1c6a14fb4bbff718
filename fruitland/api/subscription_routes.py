from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_identity
from fruitland.auth.identity import Identity
from fruitland.crud import subscription as subscription_crud
from fruitland.db import get_db
from fruitland.schemas.subscription import SubscriptionAction, SubscriptionCreate, SubscriptionRead
from fruitland.utils.tenant import get_hinted_tenant
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


@router.post("", response_model=SubscriptionRead, status_code=201)
async def create_subscription(
    payload: SubscriptionCreate,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_crud.create_subscription(db, payload, identity.id, tenant.id)


@router.get("", response_model=List[SubscriptionRead])
async def list_subscriptions(
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await subscription_crud.list_subscriptions(db, identity.id, tenant.id)


@router.patch("/{subscription_id}", response_model=SubscriptionRead)
async def update_subscription(
    subscription_id: str,
    payload: SubscriptionAction,
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    """Pause, resume or cancel."""
    subscription = await subscription_crud.get_subscription(db, subscription_id, identity.id, tenant.id)
    return await subscription_crud.apply_action(db, subscription, payload)
