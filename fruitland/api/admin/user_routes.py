from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_admin
from fruitland.auth.identity import Identity
from fruitland.core.constants import Role
from fruitland.crud import user as user_crud
from fruitland.db import get_db
from fruitland.schemas.user import DeliveryAgentRead, StaffCreate, UserRead
from fruitland.utils.tenant import get_tenant_scope

router = APIRouter()


@router.get("/users", response_model=List[UserRead])
async def list_users(
    role: Optional[Role] = None,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await user_crud.list_tenant_users(db, tenant_id, role=role)


@router.post("/users", response_model=UserRead, status_code=201)
async def create_user(
    payload: StaffCreate,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    """Provision an ADMIN or DELIVERY_PARTNER account in the resolved tenant."""
    return await user_crud.create_staff_user(db, payload, tenant_id)


@router.get("/delivery-agents", response_model=List[DeliveryAgentRead])
async def list_delivery_agents(
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    rows = await user_crud.list_delivery_agents(db, tenant_id)
    return [
        DeliveryAgentRead(
            **UserRead.model_validate(row["user"]).model_dump(),
            total_orders=row["total_orders"],
            active_orders=row["active_orders"],
        )
        for row in rows
    ]
