import json
import logging
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.core.constants import (
    DEFAULT_SITE_NAME,
    FOOTER_CONFIG_KEY,
    LANDING_PAGE_CONFIG_KEY,
    SITE_NAME_KEY,
    THEME_CONFIG_KEY,
)
from fruitland.models.store_config import StoreConfig
from fruitland.schemas.store_config import ConfigEntry

log = logging.getLogger(__name__)


async def list_config(db: AsyncSession, tenant_id: str):
    result = await db.execute(
        select(StoreConfig).where(StoreConfig.tenant_id == tenant_id).order_by(StoreConfig.key.asc())
    )
    return result.scalars().all()


async def upsert_config(db: AsyncSession, entries: List[ConfigEntry], tenant_id: str):
    existing = {c.key: c for c in await list_config(db, tenant_id)}
    for entry in entries:
        row = existing.get(entry.key)
        if row is None:
            row = StoreConfig(tenant_id=tenant_id, **entry.model_dump())
            db.add(row)
            existing[entry.key] = row
        else:
            for field, value in entry.model_dump().items():
                setattr(row, field, value)
    await db.commit()
    return await list_config(db, tenant_id)


def _json_value(values: Dict[str, str], key: str) -> Dict[str, Any]:
    raw = values.get(key)
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except ValueError:
        log.warning("Ignoring malformed JSON in store config %s", key)
        return {}
    return value if isinstance(value, dict) else {}


async def get_storefront_config(db: AsyncSession, tenant_id: str) -> Dict[str, Any]:
    values = {c.key: c.value for c in await list_config(db, tenant_id)}
    return {
        "site_name": values.get(SITE_NAME_KEY) or DEFAULT_SITE_NAME,
        "theme": _json_value(values, THEME_CONFIG_KEY),
        "landing_page": _json_value(values, LANDING_PAGE_CONFIG_KEY),
        "footer": _json_value(values, FOOTER_CONFIG_KEY),
    }
