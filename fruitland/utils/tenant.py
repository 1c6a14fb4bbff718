# fruitland/utils/tenant.py
"""
Tenant resolution and access validation.

Every tenant-scoped route goes through one of three dependencies:

* ``get_tenant_scope``: resolve the effective tenant for the caller. Non-super
  roles always get their fixed tenant; the super-role may pick any tenant.
* ``get_hinted_tenant``: flows that require an explicit tenant (cart,
  addresses, checkout, subscriptions, delivery). The hinted tenant must exist,
  be active, and be accessible to the caller.
* ``get_storefront_tenant``: anonymous storefront reads by path slug.

Resolution always completes before access validation, which always completes
before any write.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from fruitland.auth.dependencies import get_identity
from fruitland.auth.identity import Identity
from fruitland.core.constants import Role
from fruitland.core.errors import (
    TenantAccessForbidden,
    TenantInactive,
    TenantNotFound,
    TenantRequired,
)
from fruitland.db import get_db
from fruitland.utils.membership import ensure_membership
from fruitland.utils.tenant_directory import TenantDirectory, TenantRecord, tenant_directory

log = logging.getLogger(__name__)

QUERY_SLUG = "tenantSlug"
QUERY_ID = "tenantId"
HEADER_SLUG = "x-tenant-slug"
HEADER_ID = "x-tenant-id"


@dataclass(frozen=True)
class TenantHint:
    slug: Optional[str] = None
    tenant_id: Optional[str] = None
    source: Optional[str] = None  # "query" or "header"

    @property
    def is_empty(self) -> bool:
        return not (self.slug or self.tenant_id)


EMPTY_HINT = TenantHint()


def extract_tenant_hint(request: Request) -> TenantHint:
    """Query parameters take priority over headers."""
    slug = request.query_params.get(QUERY_SLUG)
    tenant_id = request.query_params.get(QUERY_ID)
    if slug or tenant_id:
        return TenantHint(slug=slug or None, tenant_id=tenant_id or None, source="query")

    slug = request.headers.get(HEADER_SLUG)
    tenant_id = request.headers.get(HEADER_ID)
    if slug or tenant_id:
        return TenantHint(slug=slug or None, tenant_id=tenant_id or None, source="header")

    return EMPTY_HINT


def get_tenant_hint(request: Request) -> TenantHint:
    hint = getattr(request.state, "tenant_hint", None)
    if hint is None:
        hint = extract_tenant_hint(request)
    return hint


async def resolve_effective_tenant_id(
    identity: Identity,
    hint: Optional[TenantHint],
    db: AsyncSession,
    directory: Optional[TenantDirectory] = None,
) -> Optional[str]:
    """
    Compute the tenant id a data operation is scoped to.

    SUPERADMIN: explicit hint, then the stored active selection, then the
    earliest-created tenant. Returns None only when no tenant exists.
    Other roles: the fixed tenant, whatever the hint says.
    """
    directory = directory or tenant_directory
    role = identity.role

    if role is Role.SUPERADMIN:
        if hint is not None and not hint.is_empty:
            tenant = await directory.lookup(db, hint)
            if tenant is None:
                raise TenantNotFound()
            return tenant.id

        if identity.active_tenant_id:
            tenant = await directory.lookup_by_id(db, identity.active_tenant_id)
            if tenant is not None:
                return tenant.id
            log.info("Active tenant %s no longer exists, using default", identity.active_tenant_id)

        fallback = await directory.earliest_tenant(db)
        return fallback.id if fallback else None

    elif role in (Role.ADMIN, Role.CUSTOMER, Role.DELIVERY_PARTNER):
        return identity.fixed_tenant_id

    raise ValueError(f"Unhandled role: {role!r}")


def can_access_tenant(role, fixed_tenant_id: Optional[str], target_tenant_id: Optional[str]) -> bool:
    """Tenant ids are opaque: strict equality, no normalisation."""
    role = Role(role)

    if role is Role.SUPERADMIN:
        return True
    elif role in (Role.ADMIN, Role.CUSTOMER, Role.DELIVERY_PARTNER):
        return fixed_tenant_id is not None and fixed_tenant_id == target_tenant_id

    raise ValueError(f"Unhandled role: {role!r}")


def require_tenant_access(identity: Identity, target_tenant_id: Optional[str]) -> None:
    if not can_access_tenant(identity.role, identity.fixed_tenant_id, target_tenant_id):
        log.warning(
            "Tenant access denied: user=%s role=%s fixed=%s target=%s",
            identity.id, identity.role.value, identity.fixed_tenant_id, target_tenant_id,
        )
        raise TenantAccessForbidden()


# -----------------------
# Request dependencies
# -----------------------

async def get_tenant_scope(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
) -> str:
    tenant_id = await resolve_effective_tenant_id(identity, get_tenant_hint(request), db)
    if tenant_id is None:
        raise TenantRequired("Please select or create a tenant first")

    require_tenant_access(identity, tenant_id)
    request.state.tenant_id = tenant_id
    return tenant_id


async def get_hinted_tenant(
    request: Request,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
) -> TenantRecord:
    hint = get_tenant_hint(request)
    if hint.is_empty:
        raise TenantRequired("tenantSlug is required")

    tenant = await tenant_directory.lookup(db, hint)
    if tenant is None:
        raise TenantNotFound()

    require_tenant_access(identity, tenant.id)
    if not tenant.is_active:
        raise TenantInactive()

    await ensure_membership(db, identity.id, tenant.id, identity.role)
    request.state.tenant_id = tenant.id
    return tenant


async def get_storefront_tenant(
    tenant_slug: str,
    db: AsyncSession = Depends(get_db),
) -> TenantRecord:
    tenant = await tenant_directory.lookup_by_slug(db, tenant_slug)
    if tenant is None:
        raise TenantNotFound()
    if not tenant.is_active:
        raise TenantInactive()
    return tenant
