# fruitland/auth/dependencies.py
from fastapi import Request, HTTPException, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from fruitland.auth.identity import SESSION_ACTIVE_TENANT_ID, Identity, identity_from_session, identity_from_user
from fruitland.core.constants import Role
from fruitland.core.errors import Unauthenticated
from fruitland.db import get_db
from fruitland.models.user import User


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    session_identity = identity_from_session(request.session)
    result = await db.execute(select(User).where(User.id == session_identity.id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active:
        raise Unauthenticated("User not found or inactive")
    return user


async def get_identity(request: Request, user: User = Depends(get_current_user)) -> Identity:
    # A cookie outlives role or tenant changes on the account
    return identity_from_user(user, request.session.get(SESSION_ACTIVE_TENANT_ID) or None)


def require_roles(*roles: Role):
    allowed = {Role(r) for r in roles}

    async def _check(identity: Identity = Depends(get_identity)) -> Identity:
        if identity.role not in allowed:
            raise HTTPException(status_code=403, detail="Insufficient role")
        return identity

    return _check


get_current_admin = require_roles(Role.SUPERADMIN, Role.ADMIN)
get_current_superadmin = require_roles(Role.SUPERADMIN)
get_current_customer = require_roles(Role.CUSTOMER)
get_current_delivery_partner = require_roles(Role.DELIVERY_PARTNER)
