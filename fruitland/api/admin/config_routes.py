from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_current_admin
from fruitland.auth.identity import Identity
from fruitland.crud import store_config as config_crud
from fruitland.db import get_db
from fruitland.schemas.store_config import ConfigEntryRead, ConfigUpsert
from fruitland.utils.tenant import get_tenant_scope

router = APIRouter()


@router.get("", response_model=List[ConfigEntryRead])
async def get_config(
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await config_crud.list_config(db, tenant_id)


@router.post("", response_model=List[ConfigEntryRead])
async def save_config(
    payload: ConfigUpsert,
    identity: Identity = Depends(get_current_admin),
    tenant_id: str = Depends(get_tenant_scope),
    db: AsyncSession = Depends(get_db),
):
    return await config_crud.upsert_config(db, payload.entries, tenant_id)
