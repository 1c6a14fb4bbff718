from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_identity
from fruitland.auth.identity import Identity
from fruitland.core.config import settings
from fruitland.crud import loyalty as loyalty_crud
from fruitland.db import get_db
from fruitland.schemas.loyalty import LoyaltySummary, LoyaltyTransactionRead
from fruitland.utils.tenant import get_hinted_tenant
from fruitland.utils.tenant_directory import TenantRecord

router = APIRouter()


@router.get("", response_model=LoyaltySummary)
async def loyalty_summary(
    tenant: TenantRecord = Depends(get_hinted_tenant),
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return LoyaltySummary(
        tenant_id=tenant.id,
        balance=await loyalty_crud.get_balance(db, identity.id, tenant.id),
        point_value=settings.LOYALTY_POINT_VALUE,
        transactions=[
            LoyaltyTransactionRead.model_validate(t)
            for t in await loyalty_crud.list_transactions(db, identity.id, tenant.id)
        ],
    )
