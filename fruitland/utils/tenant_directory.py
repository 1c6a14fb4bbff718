# fruitland/utils/tenant_directory.py
"""
Tenant Directory: read-only tenant lookups by slug or id.

Results are snapshotted into ``TenantRecord`` (detached from any session)
and cached per key for ``TENANT_CACHE_TTL_SECONDS``. A rename is visible to
other lookups only after the entry expires or ``invalidate`` is called.
Misses and datastore failures are never cached.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.core.config import settings
from fruitland.core.errors import TransientStoreError
from fruitland.models.tenant import Tenant
from fruitland.utils.tenant_cache import InMemoryTenantCache, RedisTenantCache, TenantCache

if TYPE_CHECKING:
    from fruitland.utils.tenant import TenantHint

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class TenantRecord:
    id: str
    name: str
    slug: Optional[str]
    domain: Optional[str]
    description: Optional[str]
    logo: Optional[str]
    contact_email: Optional[str]
    contact_phone: Optional[str]
    is_active: bool
    created_at: datetime

    @classmethod
    def from_model(cls, tenant: Tenant) -> "TenantRecord":
        return cls(
            id=tenant.id,
            name=tenant.name,
            slug=tenant.slug,
            domain=tenant.domain,
            description=tenant.description,
            logo=tenant.logo,
            contact_email=tenant.contact_email,
            contact_phone=tenant.contact_phone,
            is_active=bool(tenant.is_active),
            created_at=tenant.created_at,
        )

    def to_json(self) -> str:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return json.dumps(data)

    @classmethod
    def from_json(cls, raw: str) -> "TenantRecord":
        data = json.loads(raw)
        data["created_at"] = datetime.fromisoformat(data["created_at"])
        return cls(**data)


def _slug_key(slug: str) -> str:
    return f"slug:{slug}"


def _id_key(tenant_id: str) -> str:
    return f"id:{tenant_id}"


class TenantDirectory:
    def __init__(self, cache: Optional[TenantCache] = None, ttl_seconds: Optional[float] = None):
        self.cache = cache if cache is not None else InMemoryTenantCache()
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else settings.TENANT_CACHE_TTL_SECONDS

    async def lookup_by_slug(self, db: AsyncSession, slug: str) -> Optional[TenantRecord]:
        if not slug:
            return None
        return await self._lookup(db, _slug_key(slug), Tenant.slug == slug)

    async def lookup_by_id(self, db: AsyncSession, tenant_id: str) -> Optional[TenantRecord]:
        if not tenant_id:
            return None
        return await self._lookup(db, _id_key(tenant_id), Tenant.id == tenant_id)

    async def lookup(self, db: AsyncSession, hint: "TenantHint") -> Optional[TenantRecord]:
        """Resolve a hint carrying either an id or a slug; id wins when both are present."""
        if hint.tenant_id:
            return await self.lookup_by_id(db, hint.tenant_id)
        if hint.slug:
            return await self.lookup_by_slug(db, hint.slug)
        return None

    async def earliest_tenant(self, db: AsyncSession) -> Optional[TenantRecord]:
        try:
            result = await db.execute(
                select(Tenant).order_by(Tenant.created_at.asc(), Tenant.id.asc()).limit(1)
            )
            tenant = result.scalars().first()
        except SQLAlchemyError as exc:
            raise TransientStoreError() from exc
        return TenantRecord.from_model(tenant) if tenant else None

    def invalidate(
        self,
        tenant: Optional[TenantRecord] = None,
        *,
        slug: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> None:
        if tenant is not None:
            slug = slug or tenant.slug
            tenant_id = tenant_id or tenant.id
        if slug:
            self.cache.invalidate(_slug_key(slug))
        if tenant_id:
            self.cache.invalidate(_id_key(tenant_id))

    def clear(self) -> None:
        self.cache.clear()

    async def _lookup(self, db: AsyncSession, key: str, criterion) -> Optional[TenantRecord]:
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        try:
            result = await db.execute(select(Tenant).where(criterion))
            tenant = result.scalar_one_or_none()
        except SQLAlchemyError as exc:
            log.warning("Tenant lookup failed for %s", key, exc_info=True)
            raise TransientStoreError() from exc

        if tenant is None:
            log.debug("Tenant lookup miss for %s", key)
            return None

        record = TenantRecord.from_model(tenant)
        self.cache.set(key, record, self.ttl_seconds)
        return record


def build_tenant_cache(redis_url: Optional[str] = None) -> TenantCache:
    redis_url = redis_url if redis_url is not None else settings.REDIS_URL
    if redis_url:
        log.info("Tenant cache backed by Redis")
        return RedisTenantCache.from_url(
            redis_url, encode=TenantRecord.to_json, decode=TenantRecord.from_json
        )
    return InMemoryTenantCache()


# Process-wide directory used by the request dependencies
tenant_directory = TenantDirectory(cache=build_tenant_cache())
