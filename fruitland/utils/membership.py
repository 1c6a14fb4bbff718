# fruitland/utils/membership.py
"""
Membership Ensurer.

Customers get a ``UserTenant`` row the first time they act inside a tenant.
Recording the membership is best effort: the request that triggered it must
go on even when the insert fails.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.core.constants import Role
from fruitland.models.user_tenant import UserTenant

log = logging.getLogger(__name__)


async def ensure_membership(db: AsyncSession, user_id: str, tenant_id: str, role) -> None:
    """Idempotently record that a CUSTOMER belongs to ``tenant_id``. No-op for other roles."""
    if Role(role) is not Role.CUSTOMER:
        return

    try:
        result = await db.execute(
            select(UserTenant.id).where(
                UserTenant.user_id == user_id,
                UserTenant.tenant_id == tenant_id,
            )
        )
        if result.scalar_one_or_none() is not None:
            return

        db.add(UserTenant(user_id=user_id, tenant_id=tenant_id, role=Role.CUSTOMER.value))
        await db.commit()
        log.info("Recorded membership user=%s tenant=%s", user_id, tenant_id)
    except IntegrityError:
        # A concurrent request inserted the same pair first
        await db.rollback()
    except SQLAlchemyError:
        log.warning(
            "Could not record membership user=%s tenant=%s", user_id, tenant_id, exc_info=True
        )
        await db.rollback()


def provision_membership(db: AsyncSession, user_id: str, tenant_id: str, role: Role) -> UserTenant:
    """Membership for staff accounts created by a tenant admin. Caller commits."""
    membership = UserTenant(user_id=user_id, tenant_id=tenant_id, role=Role(role).value)
    db.add(membership)
    return membership
