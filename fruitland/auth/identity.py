from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from fruitland.core.constants import Role
from fruitland.core.errors import Unauthenticated

SESSION_USER_ID = "user_id"
SESSION_ROLE = "role"
SESSION_TENANT_ID = "tenant_id"
SESSION_ACTIVE_TENANT_ID = "active_tenant_id"


@dataclass(frozen=True)
class Identity:
    """The authenticated caller as stored in the session."""

    id: str
    role: Role
    fixed_tenant_id: Optional[str] = None
    # Only meaningful for SUPERADMIN: the tenant currently browsed as
    active_tenant_id: Optional[str] = None

    @property
    def is_superadmin(self) -> bool:
        return self.role is Role.SUPERADMIN


def identity_from_session(session: Mapping[str, Any]) -> Identity:
    """Build the caller identity from session data, failing closed on anything malformed."""
    user_id = session.get(SESSION_USER_ID)
    raw_role = session.get(SESSION_ROLE)
    if not user_id or not raw_role:
        raise Unauthenticated()

    return _build_identity(
        user_id,
        raw_role,
        session.get(SESSION_TENANT_ID) or None,
        session.get(SESSION_ACTIVE_TENANT_ID) or None,
    )


def identity_from_user(user, active_tenant_id: Optional[str] = None) -> Identity:
    """
    Build the caller identity from the stored account.

    Role and fixed tenant come from the ``users`` row; only the super-role's
    active selection is taken from the session.
    """
    return _build_identity(user.id, user.role, user.tenant_id or None, active_tenant_id)


def _build_identity(user_id, raw_role, fixed_tenant_id, active_tenant_id) -> Identity:
    try:
        role = Role(raw_role)
    except ValueError:
        raise Unauthenticated("Unknown role in session")

    if role is Role.SUPERADMIN:
        if fixed_tenant_id is not None:
            raise Unauthenticated("Superadmin session cannot carry a fixed tenant")
        return Identity(
            id=user_id,
            role=role,
            fixed_tenant_id=None,
            active_tenant_id=active_tenant_id,
        )
    elif role in (Role.ADMIN, Role.CUSTOMER, Role.DELIVERY_PARTNER):
        if fixed_tenant_id is None:
            raise Unauthenticated("Account is not provisioned for a tenant")
        # Non-super roles never carry an active selection
        return Identity(id=user_id, role=role, fixed_tenant_id=fixed_tenant_id)

    raise Unauthenticated(f"Unhandled role: {role.value}")


def store_identity(session: dict, user_id: str, role: Role, tenant_id: Optional[str]) -> None:
    session.clear()
    session[SESSION_USER_ID] = user_id
    session[SESSION_ROLE] = role.value
    session[SESSION_TENANT_ID] = tenant_id
